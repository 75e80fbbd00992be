from django.db   import models
from django.conf import settings


class Profile(models.Model):
    """
    A reusable bundle of personal/professional content owned by one user.
    Portfolios linked to a profile render its current `content`.
    """
    user        = models.ForeignKey(
                      settings.AUTH_USER_MODEL,
                      on_delete=models.CASCADE,
                      related_name='profiles',
                  )
    name        = models.CharField(max_length=120, default='My Profile')
    description = models.TextField(blank=True, default='')
    content     = models.JSONField(default=dict, blank=True)
    created_at  = models.DateTimeField(auto_now_add=True)
    updated_at  = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f'Profile({self.user.email} | {self.name})'
