import logging

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from users.serializers import LoginSerializer, ProfileSerializer, RegisterSerializer
from users.tokens import issue_tokens

logger = logging.getLogger(__name__)


# -----------------------------
# Register
# -----------------------------
class RegisterView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info("Registered user %s", user.email)

        return Response(
            {
                "success": True,
                "message": "Registration successful",
                **issue_tokens(user),
                "user": ProfileSerializer(user).data,
            },
            status=status.HTTP_201_CREATED,
        )


# -----------------------------
# Login
# -----------------------------
class LoginView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    def get_authenticate_header(self, request):
        # keeps bad credentials a 401 without any authenticator attached
        return 'Bearer realm="api"'

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data["user"]
        logger.info("User %s logged in", user.email)

        return Response(
            {
                "success": True,
                "message": "Login successful",
                **issue_tokens(user),
                "user": ProfileSerializer(user).data,
            },
            status=status.HTTP_200_OK,
        )
