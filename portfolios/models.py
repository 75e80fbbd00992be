from django.db         import models
from django.conf       import settings
from django.utils.crypto import get_random_string

from .templates import TemplateId

SLUG_ALPHABET = 'abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_-'


def generate_slug():
    length = settings.PORTFOLIO_SLUG_LENGTH
    while True:
        slug = get_random_string(length, allowed_chars=SLUG_ALPHABET)
        if not Portfolio.objects.filter(slug=slug).exists():
            return slug


class Portfolio(models.Model):
    """
    A profile's content presented through a template at a public slug.

    `profile_id` is a weak reference: no FK constraint, no cascade. While it
    points at a profile of the same owner, readers see that profile's live
    content; `content` is the snapshot taken when the link was made and is
    only served when the link is missing or broken.
    """
    user            = models.ForeignKey(
                          settings.AUTH_USER_MODEL,
                          on_delete=models.CASCADE,
                          related_name='portfolios',
                      )
    template_id     = models.CharField(max_length=30, choices=TemplateId.choices, default=TemplateId.MINIMAL)
    profile_id      = models.BigIntegerField(null=True, blank=True, db_index=True)
    slug            = models.CharField(max_length=32, unique=True, editable=False)
    title           = models.CharField(max_length=200, default='My Portfolio')
    description     = models.TextField(blank=True, default='')
    content         = models.JSONField(default=dict, blank=True)
    is_published    = models.BooleanField(default=False)
    has_been_edited = models.BooleanField(default=False)
    created_at      = models.DateTimeField(auto_now_add=True)
    updated_at      = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = generate_slug()
        super().save(*args, **kwargs)

    def __str__(self):
        return f'{self.title} ({self.slug}) | {"Published" if self.is_published else "Draft"}'
