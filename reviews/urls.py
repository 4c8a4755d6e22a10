from django.urls import path
from . import views

app_name = 'reviews'

urlpatterns = [
    path('workers/<str:worker_id>/', views.worker_reviews, name='worker_reviews'),
    path('workers/<str:worker_id>/create/', views.create_review, name='create'),
]
