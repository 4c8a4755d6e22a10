from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    path('me/', views.me, name='me'),
    path('me/profile/', views.update_profile, name='update_profile'),
    path('me/avatar/', views.upload_avatar, name='upload_avatar'),
]
