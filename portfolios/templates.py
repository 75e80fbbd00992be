"""
Closed registry of portfolio templates.

Renderers live outside this service; they receive the resolved content and
the template id. Adding a template means adding a member here.
"""
from django.conf import settings
from django.db   import models


class TemplateId(models.TextChoices):
    MINIMAL   = 'minimal',   'Minimalist'
    MODERN    = 'modern',    'Modern Dark'
    CREATIVE  = 'creative',  'Creative'
    CORPORATE = 'corporate', 'Corporate'
    RESUME_1  = 'resume_1',  'Resume Style'


DESCRIPTIONS = {
    TemplateId.MINIMAL:   'Clean, text-focused design for professionals.',
    TemplateId.MODERN:    'Sleek, dark-themed design with gradients.',
    TemplateId.CREATIVE:  'Bold, artistic design with vibrant colors and animations.',
    TemplateId.CORPORATE: 'Professional, business-focused design for corporate portfolios.',
    TemplateId.RESUME_1:  'Traditional resume format, perfect for job applications.',
}


def template_for(template_id):
    """Stored ids from older data may no longer exist; those render with DEFAULT_TEMPLATE_ID."""
    try:
        return TemplateId(template_id)
    except ValueError:
        return TemplateId(settings.DEFAULT_TEMPLATE_ID)


def template_list():
    return [
        {'id': t.value, 'name': t.label, 'description': DESCRIPTIONS[t]}
        for t in TemplateId
    ]
