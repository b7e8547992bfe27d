# users/urls.py
from django.urls import path, include
from rest_framework.routers import SimpleRouter
from rest_framework_simplejwt.views import TokenRefreshView

from users.apis import AdminUserViewSet, ClientMeAPIView, LoginView, RegisterView

# -----------------------------
# Admin Router
# -----------------------------
admin_router = SimpleRouter()
admin_router.register(r"users", AdminUserViewSet, basename="admin-user")

urlpatterns = [
    # Admin endpoints
    path("admin/", include(admin_router.urls)),

    # Auth endpoints
    path("auth/register/", RegisterView.as_view(), name="auth-register"),
    path("auth/login/", LoginView.as_view(), name="auth-login"),
    path("auth/me/", ClientMeAPIView.as_view(), name="auth-me"),
    path("auth/token/refresh/", TokenRefreshView.as_view(), name="token-refresh"),
]
