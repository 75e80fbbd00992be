from django.contrib import admin
from .models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display  = ('id', 'name', 'user', 'created_at', 'updated_at')
    search_fields = ('name', 'user__email')
    readonly_fields = ('created_at', 'updated_at')
