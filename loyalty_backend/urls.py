from django.contrib import admin
from django.urls import path, include
admin.site.site_header = "Loyalty Operations Admin"
admin.site.site_title = "Loyalty Admin Portal"
admin.site.index_title = "Promotions Dashboard"

from django.http import JsonResponse


def home_view(request):
    return JsonResponse({"status": "ok", "service": "loyalty-backend"})


urlpatterns = [
    path('', home_view, name='home'),
    path('admin/', admin.site.urls),
    path('api/auth/', include('accounts.urls')),
    path('api/auth/', include('rewards.api.urls')),
    path('api/users/', include('accounts.user_urls')),
    path('api/', include('promos.api.urls')),
]
