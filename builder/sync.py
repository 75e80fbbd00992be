"""
Builder synchronization loop.

Holds the editable copy of a portfolio's content, title and description.
Edits apply locally at once; a debounce timer collapses bursts of edits into
one persisted write carrying the latest state. Template changes skip the
debounce and persist immediately.

Transport-agnostic: persistence is whatever callables the caller hands in
(see builder.persistence for the ORM-backed ones).

    session = create_sync_session(content, 'My Portfolio', '', persist)
    session.mutate('personalInfo.name', 'Ada')
    session.mutate('skills', 'Python, Django')
    session.force_save_now()
"""
import copy
import enum
import functools
import logging
import threading

from django.conf            import settings
from django.core.exceptions import ValidationError

from profiles.content import normalize_content
from profiles.skills  import skills_from_text, skills_to_json
from uploads.validators import validate_upload

from .exceptions import SaveFailed, UploadRejected, UploadFailed

logger = logging.getLogger(__name__)


class SyncState(str, enum.Enum):
    LOADED       = 'loaded'
    EDITING      = 'editing'
    PENDING_SAVE = 'pending_save'
    SAVING       = 'saving'
    SAVED        = 'saved'


def parse_path(field_path):
    """'projects.0.title' -> ['projects', 0, 'title']"""
    if isinstance(field_path, (list, tuple)):
        parts = list(field_path)
    else:
        parts = [p for p in str(field_path).split('.') if p]
    if not parts:
        raise ValueError('Empty field path.')
    return [int(p) if isinstance(p, str) and p.isdigit() else p for p in parts]


def _container_for(document, keys):
    node = document
    for key in keys:
        if isinstance(node, list):
            node = node[key]
        else:
            node = node.setdefault(key, {})
    return node


def set_path(document, field_path, value):
    keys = parse_path(field_path)
    parent = _container_for(document, keys[:-1])
    last   = keys[-1]
    parent[last] = value


def get_path(document, field_path):
    node = document
    for key in parse_path(field_path):
        node = node[key]
    return node


class SyncSession:
    """
    One open builder session.

    Args:
        content, title, description: server-resolved starting state
        persist: callable(content, title, description); raising means failure
        persist_template: callable(template_id) used by set_template
        template_id: current template
        delay: quiet period in seconds (defaults to BUILDER_SAVE_DELAY)
        timer_factory: callable(delay, fn) -> object with start()/cancel()
    """

    def __init__(self, content, title, description, persist,
                 persist_template=None, template_id=None, delay=None,
                 timer_factory=threading.Timer):
        self._lock = threading.RLock()

        self._content     = normalize_content(content)
        self._title       = title or ''
        self._description = description or ''
        self._template_id = template_id

        self._persist          = persist
        self._persist_template = persist_template
        self._delay            = settings.BUILDER_SAVE_DELAY if delay is None else delay
        self._timer_factory    = timer_factory

        self._timer       = None
        self._timer_gen   = 0
        self._state       = SyncState.LOADED
        self._in_flight   = 0
        self._edit_seq    = 0     # bumped on every local edit
        self._saved_seq   = 0     # newest edit_seq covered by a successful save
        self._preview_key = 0
        self._closed      = False

    # ─── Snapshot accessors ──────────────────────────────────────────────────

    @property
    def state(self):
        with self._lock:
            return self._state

    @property
    def content(self):
        with self._lock:
            return copy.deepcopy(self._content)

    @property
    def title(self):
        return self._title

    @property
    def description(self):
        return self._description

    @property
    def template_id(self):
        return self._template_id

    @property
    def preview_key(self):
        """Changes whenever the live preview must re-render."""
        return self._preview_key

    @property
    def is_saving(self):
        with self._lock:
            return self._in_flight > 0

    @property
    def has_unsaved_changes(self):
        with self._lock:
            return self._edit_seq > self._saved_seq

    # ─── Local edits ─────────────────────────────────────────────────────────

    def mutate(self, field_path, value):
        """
        Set a nested field, e.g. 'personalInfo.bio' or 'experience.1.current'.
        'skills' given as a string is read as a comma-separated list.
        """
        keys = parse_path(field_path)
        if keys == ['skills'] and isinstance(value, str):
            value = skills_to_json(skills_from_text(value))
        with self._lock:
            set_path(self._content, keys, copy.deepcopy(value))
            self._touch()

    def append(self, field_path, item):
        with self._lock:
            get_path(self._content, field_path).append(copy.deepcopy(item))
            self._touch()

    def remove(self, field_path, index):
        with self._lock:
            del get_path(self._content, field_path)[index]
            self._touch()

    def set_title(self, title):
        with self._lock:
            self._title = title
            self._touch()

    def set_description(self, description):
        with self._lock:
            self._description = description
            self._touch()

    def _touch(self):
        self._edit_seq += 1
        self._preview_key += 1
        self._state = SyncState.EDITING
        if self._closed:
            return
        self._cancel_timer()
        self._timer = self._timer_factory(self._delay, functools.partial(self._on_timer, self._timer_gen))
        if hasattr(self._timer, 'daemon'):
            self._timer.daemon = True
        self._state = SyncState.PENDING_SAVE
        self._timer.start()

    def _cancel_timer(self):
        # invalidates any timer that already fired but has not taken the lock yet
        self._timer_gen += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    # ─── Saving ──────────────────────────────────────────────────────────────

    def _on_timer(self, generation):
        with self._lock:
            if generation != self._timer_gen or self._closed:
                return
            self._timer = None
        self._save(explicit=False)

    def force_save_now(self):
        """Save the current state immediately; raises SaveFailed on failure."""
        with self._lock:
            self._cancel_timer()
        self._save(explicit=True)

    def _save(self, explicit):
        with self._lock:
            content     = copy.deepcopy(self._content)
            title       = self._title
            description = self._description
            seq         = self._edit_seq
            self._in_flight += 1
            self._state = SyncState.SAVING

        try:
            self._persist(content, title, description)
        except Exception as exc:
            with self._lock:
                self._in_flight -= 1
                self._settle()
            if explicit:
                raise SaveFailed('Failed to save changes. Please try again.') from exc
            logger.exception('Auto-save failed; changes kept locally')
            return False

        with self._lock:
            self._in_flight -= 1
            # overlapping saves may finish out of order; the newest edit wins
            self._saved_seq = max(self._saved_seq, seq)
            self._settle()
        return True

    def _settle(self):
        if self._timer is not None:
            self._state = SyncState.PENDING_SAVE
        elif self._in_flight > 0:
            self._state = SyncState.SAVING
        elif self._edit_seq > self._saved_seq:
            self._state = SyncState.EDITING
        else:
            self._state = SyncState.SAVED

    # ─── Out-of-band actions ─────────────────────────────────────────────────

    def set_template(self, template_id):
        """
        Persist a template change right away. The local template only
        changes once the write succeeds. Returns False for a no-op.
        """
        if template_id == self._template_id:
            return False
        if self._persist_template is None:
            raise SaveFailed('Template changes are not supported by this session.')

        try:
            self._persist_template(template_id)
        except Exception as exc:
            logger.warning('Template change to %s failed: %s', template_id, exc)
            raise SaveFailed('Failed to change template. Please try again.') from exc

        with self._lock:
            self._template_id = template_id
            self._preview_key += 1
        return True

    def attach_photo(self, filename, content_type, data, uploader):
        """
        Validate locally, upload, then set personalInfo.profilePhoto to the
        returned URL. Local content is untouched unless the upload succeeds.

        uploader: callable(filename, content_type, data) -> public URL
        """
        try:
            validate_upload(content_type, len(data))
        except ValidationError as e:
            raise UploadRejected(e.messages[0]) from e

        try:
            url = uploader(filename, content_type, data)
        except Exception as exc:
            raise UploadFailed(str(exc) or 'Failed to upload image. Please try again.') from exc

        self.mutate('personalInfo.profilePhoto', url)
        return url

    def close(self):
        """Stop the debounce timer; pending edits are not saved."""
        with self._lock:
            self._closed = True
            self._cancel_timer()


def create_sync_session(initial_content, initial_title, initial_description, persist, **kwargs):
    return SyncSession(initial_content, initial_title, initial_description, persist, **kwargs)
