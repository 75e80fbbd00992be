"""
URL configuration for core project.
"""
from django.conf             import settings
from django.conf.urls.static import static
from django.contrib          import admin
from django.urls             import path, include

from portfolios.views import PublicPortfolioView, TemplateListView

urlpatterns = [
    path('admin/', admin.site.urls),

    # ── Auth & Users ───────────────────────────────
    path('api/auth/', include('users.urls')),

    # ── Profiles ───────────────────────────────────
    path('api/profiles/', include('profiles.urls')),

    # ── Portfolios / Templates ─────────────────────
    path('api/portfolios/', include('portfolios.urls')),
    path('api/templates/',  TemplateListView.as_view(),    name='template_list'),

    # ── Public pages ───────────────────────────────
    path('api/p/<str:slug>/', PublicPortfolioView.as_view(), name='public_portfolio'),

    # ── Uploads ────────────────────────────────────
    path('api/upload/', include('uploads.urls')),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
