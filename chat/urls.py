from django.urls import path
from . import views

app_name = 'chat'

urlpatterns = [
    path('', views.conversation_list, name='conversation_list'),
    path('start/', views.start_conversation, name='start'),
    path('<str:conversation_id>/messages/', views.conversation_messages, name='messages'),
    path('<str:conversation_id>/send/', views.send_message, name='send'),
    path('<str:conversation_id>/read/', views.mark_read, name='mark_read'),
    path('api/unread-count/', views.get_unread_count, name='unread_count'),
]
