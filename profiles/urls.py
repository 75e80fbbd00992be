from django.urls import path
from .views import ProfileListCreateView, ProfileDetailView

urlpatterns = [
    path('',          ProfileListCreateView.as_view(), name='profile_list'),
    path('<int:pk>/', ProfileDetailView.as_view(),     name='profile_detail'),
]
