from .auth import RegisterView, LoginView
from .me import ClientMeAPIView
from .admin_users import AdminUserViewSet

__all__ = ["RegisterView", "LoginView", "ClientMeAPIView", "AdminUserViewSet"]
