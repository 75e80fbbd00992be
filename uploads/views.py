import logging

from django.core.exceptions      import ValidationError
from rest_framework              import status
from rest_framework.views        import APIView
from rest_framework.response     import Response
from rest_framework.parsers      import MultiPartParser, FormParser
from rest_framework.permissions  import IsAuthenticated

from .storage    import store_upload
from .validators import validate_upload

logger = logging.getLogger(__name__)


class UploadView(APIView):
    """
    POST /api/upload/  (multipart, field "file")
    Validates declared MIME type and size, then stores the image and
    returns its public URL.
    """
    permission_classes = [IsAuthenticated]
    parser_classes     = [MultiPartParser, FormParser]

    def post(self, request):
        uploaded = request.FILES.get('file')
        if not uploaded:
            return Response({'message': 'No file provided'}, status=status.HTTP_400_BAD_REQUEST)

        try:
            validate_upload(uploaded.content_type, uploaded.size)
        except ValidationError as e:
            return Response({'message': e.messages[0]}, status=status.HTTP_400_BAD_REQUEST)

        try:
            url, filename = store_upload(uploaded)
        except OSError:
            logger.exception('Upload error for user %s', request.user.pk)
            return Response(
                {'message': 'Failed to upload file'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        logger.info('Stored upload %s for user %s', filename, request.user.pk)
        return Response({'url': url, 'filename': filename})
