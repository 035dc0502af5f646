from rest_framework.permissions import AllowAny
from rest_framework_simplejwt.views import TokenObtainPairView
from evaluation_app.serializers.auth_serializers import EmailLoginSerializer


class EmailLoginView(TokenObtainPairView):
    """POST /auth/login/ with email or username + password → JWT pair."""
    serializer_class = EmailLoginSerializer
    permission_classes = [AllowAny]
