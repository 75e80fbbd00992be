from rest_framework              import generics, status
from rest_framework.views        import APIView
from rest_framework.response     import Response
from rest_framework.permissions  import IsAuthenticated, AllowAny

from .models       import Portfolio
from .resolution   import bulk_profile_lookup, lookup_owned_profile
from .serializers  import (
    PortfolioSerializer,
    PublicPortfolioSerializer,
    CreatePortfolioSerializer,
    UpdatePortfolioSerializer,
)
from .templates    import template_list


# ─── Templates (public) ───────────────────────────────────────────────────────

class TemplateListView(APIView):
    """GET /api/templates/  — Public"""
    permission_classes     = [AllowAny]
    authentication_classes = []

    def get(self, request):
        return Response(template_list())


# ─── Collection ───────────────────────────────────────────────────────────────

class PortfolioListCreateView(generics.ListCreateAPIView):
    """
    GET  /api/portfolios/  — the caller's portfolios, newest first
    POST /api/portfolios/  — create from one of the caller's profiles
    """
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return Portfolio.objects.filter(user=self.request.user).order_by('-created_at', '-id')

    def get_serializer_class(self):
        if self.request.method == 'POST':
            return CreatePortfolioSerializer
        return PortfolioSerializer

    def list(self, request, *args, **kwargs):
        portfolios = list(self.get_queryset())
        serializer = PortfolioSerializer(
            portfolios, many=True,
            context={'request': request, 'profile_lookup': bulk_profile_lookup(portfolios)},
        )
        return Response(serializer.data)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        profile = lookup_owned_profile(serializer.validated_data['profileId'], request.user.pk)
        if profile is None:
            return Response({'message': 'Profile not found'}, status=status.HTTP_404_NOT_FOUND)

        serializer.context['profile'] = profile
        portfolio = serializer.save()
        return Response(PortfolioSerializer(portfolio).data, status=status.HTTP_201_CREATED)


# ─── Detail ───────────────────────────────────────────────────────────────────

class PortfolioDetailView(APIView):
    """
    GET          /api/portfolios/<pk>/  — resolved content
    PUT / PATCH  /api/portfolios/<pk>/  — whitelisted partial merge
    DELETE       /api/portfolios/<pk>/
    """
    permission_classes = [IsAuthenticated]

    def _get_portfolio(self, pk, user):
        try:
            return Portfolio.objects.get(pk=pk, user=user)
        except Portfolio.DoesNotExist:
            return None

    def get(self, request, pk):
        portfolio = self._get_portfolio(pk, request.user)
        if not portfolio:
            return Response({'message': 'Not found'}, status=status.HTTP_404_NOT_FOUND)
        return Response(PortfolioSerializer(portfolio).data)

    def patch(self, request, pk):
        portfolio = self._get_portfolio(pk, request.user)
        if not portfolio:
            return Response({'message': 'Not found'}, status=status.HTTP_404_NOT_FOUND)

        serializer = UpdatePortfolioSerializer(portfolio, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        profile_id = serializer.validated_data.get('profile_id')
        if profile_id is not None:
            linked = lookup_owned_profile(profile_id, request.user.pk)
            if linked is None:
                return Response({'message': 'Profile not found'}, status=status.HTTP_404_NOT_FOUND)
            serializer.context['linked_profile'] = linked

        serializer.save()
        return Response(PortfolioSerializer(portfolio).data)

    def put(self, request, pk):
        return self.patch(request, pk)

    def delete(self, request, pk):
        portfolio = self._get_portfolio(pk, request.user)
        if not portfolio:
            return Response({'message': 'Not found'}, status=status.HTTP_404_NOT_FOUND)
        portfolio.delete()
        return Response({'message': 'Deleted successfully'})


# ─── Public page ──────────────────────────────────────────────────────────────

class PublicPortfolioView(APIView):
    """
    GET /api/p/<slug>/  — Public
    Only published portfolios resolve; drafts look exactly like unknown slugs.
    """
    permission_classes     = [AllowAny]
    authentication_classes = []

    def get(self, request, slug):
        portfolio = Portfolio.objects.filter(slug=slug, is_published=True).first()
        if not portfolio:
            return Response({'message': 'Not found'}, status=status.HTTP_404_NOT_FOUND)
        return Response(PublicPortfolioSerializer(portfolio).data)
