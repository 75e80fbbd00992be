from django.contrib import admin
from .models import Portfolio


@admin.register(Portfolio)
class PortfolioAdmin(admin.ModelAdmin):
    list_display    = ('id', 'title', 'slug', 'user', 'template_id', 'is_published', 'created_at')
    list_filter     = ('is_published', 'template_id')
    search_fields   = ('title', 'slug', 'user__email')
    readonly_fields = ('slug', 'created_at', 'updated_at')
