from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('admin/', admin.site.urls),
    path('accounts/', include('django.contrib.auth.urls')),
    path('ministry/', include('ministry.urls')),
    path('api/', include('ministry.api_urls')),
    path('', include('dashboard.urls')),
]
