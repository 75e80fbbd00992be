from rest_framework              import generics, status
from rest_framework.views        import APIView
from rest_framework.response     import Response
from rest_framework.permissions  import IsAuthenticated

from .models       import Profile
from .serializers  import ProfileSerializer, CreateProfileSerializer, UpdateProfileSerializer


# ─── Collection ───────────────────────────────────────────────────────────────

class ProfileListCreateView(generics.ListCreateAPIView):
    """
    GET  /api/profiles/  — the caller's profiles, newest first
    POST /api/profiles/  — create a profile (content scaffolded when omitted)
    """
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return Profile.objects.filter(user=self.request.user).order_by('-created_at', '-id')

    def get_serializer_class(self):
        if self.request.method == 'POST':
            return CreateProfileSerializer
        return ProfileSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        profile = serializer.save()
        return Response(ProfileSerializer(profile).data, status=status.HTTP_201_CREATED)


# ─── Detail ───────────────────────────────────────────────────────────────────

class ProfileDetailView(APIView):
    """
    GET          /api/profiles/<pk>/
    PUT / PATCH  /api/profiles/<pk>/  — whitelisted partial merge
    DELETE       /api/profiles/<pk>/  — linked portfolios are left untouched
    """
    permission_classes = [IsAuthenticated]

    def _get_profile(self, pk, user):
        try:
            return Profile.objects.get(pk=pk, user=user)
        except Profile.DoesNotExist:
            return None

    def get(self, request, pk):
        profile = self._get_profile(pk, request.user)
        if not profile:
            return Response({'message': 'Not found'}, status=status.HTTP_404_NOT_FOUND)
        return Response(ProfileSerializer(profile).data)

    def patch(self, request, pk):
        profile = self._get_profile(pk, request.user)
        if not profile:
            return Response({'message': 'Not found'}, status=status.HTTP_404_NOT_FOUND)

        serializer = UpdateProfileSerializer(profile, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(ProfileSerializer(profile).data)

    def put(self, request, pk):
        return self.patch(request, pk)

    def delete(self, request, pk):
        profile = self._get_profile(pk, request.user)
        if not profile:
            return Response({'message': 'Not found'}, status=status.HTTP_404_NOT_FOUND)
        profile.delete()
        return Response({'message': 'Deleted successfully'})
