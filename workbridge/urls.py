from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/workers/', include('workers.urls')),
    path('api/jobs/', include('jobs.urls')),
    path('api/reviews/', include('reviews.urls')),
    path('api/conversations/', include('chat.urls')),
    path('api/users/', include('users.urls')),
]
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
