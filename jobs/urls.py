from django.urls import path
from . import views

app_name = 'jobs'

urlpatterns = [
    path('', views.job_list, name='list'),
    path('mine/', views.my_jobs, name='mine'),
    path('create/', views.job_create, name='create'),
    path('<str:job_id>/', views.job_detail, name='detail'),
    path('<str:job_id>/update/', views.job_update, name='update'),
    path('<str:job_id>/deactivate/', views.job_deactivate, name='deactivate'),
    path('<str:job_id>/delete/', views.job_delete, name='delete'),
]
