from django.urls import path
from . import views

app_name = 'workers'

urlpatterns = [
    path('', views.worker_search, name='search'),
    path('saved/', views.saved_workers, name='saved'),
    path('<str:worker_id>/', views.worker_detail, name='detail'),
    path('<str:worker_id>/save/', views.save_worker, name='save'),
    path('<str:worker_id>/unsave/', views.unsave_worker, name='unsave'),
]
