import logging

from django.contrib.auth                      import authenticate
from rest_framework                           import generics, status
from rest_framework.views                     import APIView
from rest_framework.response                  import Response
from rest_framework.permissions               import IsAuthenticated, AllowAny
from rest_framework_simplejwt.tokens          import RefreshToken
from rest_framework_simplejwt.exceptions      import TokenError

from .serializers import RegisterSerializer, UserSerializer

logger = logging.getLogger(__name__)


def _tokens_for(user):
    refresh = RefreshToken.for_user(user)
    return {
        'refresh': str(refresh),
        'access':  str(refresh.access_token),
    }


# ─── Register ─────────────────────────────────────────────────────────────────

class RegisterView(generics.CreateAPIView):
    """POST /api/auth/register/"""
    serializer_class   = RegisterSerializer
    permission_classes = [AllowAny]

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info('Registered user %s', user.email)

        return Response({
            'message': 'User created successfully',
            'user':    UserSerializer(user).data,
            'tokens':  _tokens_for(user),
        }, status=status.HTTP_201_CREATED)


# ─── Login ────────────────────────────────────────────────────────────────────

class LoginView(APIView):
    """POST /api/auth/login/"""
    permission_classes = [AllowAny]

    def post(self, request):
        email    = (request.data.get('email') or '').strip().lower()
        password = request.data.get('password') or ''

        if not email or not password:
            return Response(
                {'message': 'Email and password are required.'},
                status=status.HTTP_400_BAD_REQUEST
            )

        user = authenticate(request, email=email, password=password)
        if user is None:
            return Response(
                {'message': 'Invalid credentials'},
                status=status.HTTP_401_UNAUTHORIZED
            )

        return Response({
            'user':   UserSerializer(user).data,
            'tokens': _tokens_for(user),
        })


# ─── Logout ───────────────────────────────────────────────────────────────────

class LogoutView(APIView):
    """POST /api/auth/logout/  — blacklists the refresh token."""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        refresh_token = request.data.get('refresh')
        if not refresh_token:
            return Response(
                {'message': 'Refresh token is required.'},
                status=status.HTTP_400_BAD_REQUEST
            )
        try:
            RefreshToken(refresh_token).blacklist()
        except TokenError:
            return Response(
                {'message': 'Invalid or already-blacklisted token.'},
                status=status.HTTP_400_BAD_REQUEST
            )
        return Response({'message': 'Logged out successfully.'})


# ─── Current user ─────────────────────────────────────────────────────────────

class MeView(APIView):
    """GET /api/auth/me/"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(UserSerializer(request.user).data)
