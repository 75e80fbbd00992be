import time

from django.conf              import settings
from django.core.files.storage import default_storage
from django.utils.crypto       import get_random_string

RANDOM_ALPHABET = 'abcdefghijklmnopqrstuvwxyz0123456789'


def generate_filename(original_name, content_type=''):
    """<epoch-ms>-<13 random chars>.<extension of the uploaded name>"""
    if '.' in (original_name or ''):
        extension = original_name.rsplit('.', 1)[-1].lower()
    else:
        extension = (content_type.split('/')[-1] if content_type else '') or 'bin'
    return f'{int(time.time() * 1000)}-{get_random_string(13, RANDOM_ALPHABET)}.{extension}'


def store_upload(uploaded_file):
    """
    Writes the file under UPLOAD_SUBDIR and returns (public_url, filename).
    Storage errors propagate to the caller.
    """
    filename = generate_filename(uploaded_file.name, getattr(uploaded_file, 'content_type', ''))
    saved_as = default_storage.save(f'{settings.UPLOAD_SUBDIR}/{filename}', uploaded_file)
    return default_storage.url(saved_as), saved_as.rsplit('/', 1)[-1]
