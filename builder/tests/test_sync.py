from django.test import SimpleTestCase

from builder.exceptions import SaveFailed, UploadRejected, UploadFailed
from builder.sync import SyncState, create_sync_session, parse_path, set_path, get_path


class ManualTimer:
    """Stands in for threading.Timer; fires only when the test says so."""

    created = None

    def __init__(self, delay, fn):
        self.delay     = delay
        self.fn        = fn
        self.started   = False
        self.cancelled = False
        ManualTimer.created.append(self)

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.fn()


class RecordingPersister:

    def __init__(self, fail=False):
        self.calls = []
        self.fail  = fail

    def __call__(self, content, title, description):
        self.calls.append((content, title, description))
        if self.fail:
            raise ConnectionError('backend unavailable')


class PathTest(SimpleTestCase):

    def test_parse_path(self):
        self.assertEqual(parse_path('projects.0.title'), ['projects', 0, 'title'])
        self.assertEqual(parse_path(['skills']), ['skills'])

    def test_empty_path(self):
        with self.assertRaises(ValueError):
            parse_path('')

    def test_set_and_get(self):
        doc = {'projects': [{'title': 'A'}]}
        set_path(doc, 'projects.0.title', 'B')
        set_path(doc, 'personalInfo.bio', 'Hi')
        self.assertEqual(get_path(doc, 'projects.0.title'), 'B')
        self.assertEqual(doc['personalInfo'], {'bio': 'Hi'})


class SyncSessionTest(SimpleTestCase):

    def setUp(self):
        ManualTimer.created = []
        self.persist = RecordingPersister()
        self.template_calls = []
        self.session = create_sync_session(
            {'personalInfo': {'name': 'Ada'}, 'skills': []},
            'My Portfolio',
            '',
            self.persist,
            persist_template=self.template_calls.append,
            template_id='minimal',
            delay=1.0,
            timer_factory=ManualTimer,
        )

    def test_initial_state(self):
        self.assertEqual(self.session.state, SyncState.LOADED)
        self.assertFalse(self.session.has_unsaved_changes)
        self.assertEqual(self.session.content['projects'], [])

    def test_edit_applies_locally_and_schedules_save(self):
        key = self.session.preview_key
        self.session.mutate('personalInfo.bio', 'Hello')
        self.assertEqual(self.session.content['personalInfo']['bio'], 'Hello')
        self.assertEqual(self.session.state, SyncState.PENDING_SAVE)
        self.assertNotEqual(self.session.preview_key, key)
        self.assertEqual(self.persist.calls, [])
        self.assertEqual(ManualTimer.created[0].delay, 1.0)

    def test_burst_of_edits_saves_once_with_latest_state(self):
        """Test edits inside the quiet period collapse into one write."""
        self.session.mutate('personalInfo.bio', 'H')
        self.session.mutate('personalInfo.bio', 'He')
        self.session.set_title('Portfolio')
        self.session.mutate('personalInfo.bio', 'Hey')

        timers = ManualTimer.created
        self.assertEqual(len(timers), 4)
        self.assertTrue(all(t.cancelled for t in timers[:-1]))

        timers[-1].fire()
        self.assertEqual(len(self.persist.calls), 1)
        content, title, _ = self.persist.calls[0]
        self.assertEqual(content['personalInfo']['bio'], 'Hey')
        self.assertEqual(title, 'Portfolio')
        self.assertEqual(self.session.state, SyncState.SAVED)
        self.assertFalse(self.session.has_unsaved_changes)

    def test_stale_timer_does_nothing(self):
        """Test a superseded timer that fires late does not save."""
        self.session.mutate('personalInfo.bio', 'A')
        self.session.mutate('personalInfo.bio', 'B')
        ManualTimer.created[0].fire()
        self.assertEqual(self.persist.calls, [])
        self.assertEqual(self.session.state, SyncState.PENDING_SAVE)

    def test_skills_text_is_split(self):
        self.session.mutate('skills', 'Python, Django ,, SQL')
        self.assertEqual(self.session.content['skills'], ['Python', 'Django', 'SQL'])

    def test_append_and_remove(self):
        self.session.append('projects', {'title': 'Engine'})
        self.session.append('projects', {'title': 'Loom'})
        self.session.remove('projects', 0)
        self.assertEqual(self.session.content['projects'], [{'title': 'Loom'}])

    def test_content_is_a_copy(self):
        self.session.content['personalInfo']['name'] = 'Changed'
        self.assertEqual(self.session.content['personalInfo']['name'], 'Ada')

    def test_auto_save_failure_keeps_changes(self):
        """Test a failed auto-save is logged and the edits stay unsaved."""
        self.persist.fail = True
        self.session.mutate('personalInfo.bio', 'Hello')
        with self.assertLogs('builder.sync', level='ERROR'):
            ManualTimer.created[-1].fire()
        self.assertTrue(self.session.has_unsaved_changes)
        self.assertEqual(self.session.state, SyncState.EDITING)
        self.assertEqual(self.session.content['personalInfo']['bio'], 'Hello')

    def test_force_save_now(self):
        self.session.mutate('personalInfo.bio', 'Hello')
        self.session.force_save_now()
        self.assertEqual(len(self.persist.calls), 1)
        self.assertTrue(ManualTimer.created[-1].cancelled)
        self.assertEqual(self.session.state, SyncState.SAVED)

    def test_force_save_failure_raises(self):
        self.persist.fail = True
        self.session.mutate('personalInfo.bio', 'Hello')
        with self.assertRaises(SaveFailed):
            self.session.force_save_now()
        self.assertTrue(self.session.has_unsaved_changes)

    def _session_saving_with(self, persist):
        return create_sync_session(
            {'personalInfo': {'name': 'Ada'}}, 'My Portfolio', '', persist,
            delay=1.0, timer_factory=ManualTimer,
        )

    def test_edit_during_save_schedules_another_save(self):
        """Test an edit made while a save is in flight starts a new debounce cycle."""
        calls, observed = [], {}

        def persist(content, title, description):
            calls.append(content['personalInfo']['bio'])
            if len(calls) == 1:
                session.mutate('personalInfo.bio', 'second')
                observed['state'] = session.state

        session = self._session_saving_with(persist)
        session.mutate('personalInfo.bio', 'first')
        ManualTimer.created[-1].fire()

        self.assertEqual(observed['state'], SyncState.PENDING_SAVE)
        self.assertEqual(session.state, SyncState.PENDING_SAVE)
        self.assertTrue(session.has_unsaved_changes)
        self.assertEqual(len(ManualTimer.created), 2)

        ManualTimer.created[-1].fire()
        self.assertEqual(calls, ['first', 'second'])
        self.assertEqual(session.state, SyncState.SAVED)
        self.assertFalse(session.has_unsaved_changes)

    def test_older_save_finishing_last_keeps_newer_result(self):
        """Test an older save completing after a newer one leaves nothing unsaved."""
        calls, observed = [], {}

        def persist(content, title, description):
            calls.append(content['personalInfo']['bio'])
            if len(calls) == 1:
                # a newer save starts and completes while this one is still in flight
                session.mutate('personalInfo.bio', 'newer')
                session.force_save_now()
                observed['state']     = session.state
                observed['is_saving'] = session.is_saving
                observed['unsaved']   = session.has_unsaved_changes

        session = self._session_saving_with(persist)
        session.mutate('personalInfo.bio', 'older')
        ManualTimer.created[-1].fire()

        self.assertEqual(calls, ['older', 'newer'])
        self.assertEqual(observed, {'state': SyncState.SAVING, 'is_saving': True, 'unsaved': False})
        self.assertFalse(session.has_unsaved_changes)
        self.assertFalse(session.is_saving)
        self.assertEqual(session.state, SyncState.SAVED)

    def test_template_change_bypasses_debounce(self):
        """Test a template switch persists at once and leaves content edits pending."""
        self.session.mutate('personalInfo.bio', 'Hello')
        key = self.session.preview_key

        self.assertTrue(self.session.set_template('modern'))
        self.assertEqual(self.template_calls, ['modern'])
        self.assertEqual(self.session.template_id, 'modern')
        self.assertNotEqual(self.session.preview_key, key)
        self.assertEqual(self.persist.calls, [])
        self.assertEqual(self.session.state, SyncState.PENDING_SAVE)

    def test_same_template_is_noop(self):
        self.assertFalse(self.session.set_template('minimal'))
        self.assertEqual(self.template_calls, [])

    def test_template_failure_keeps_old_template(self):
        def failing(template_id):
            raise ConnectionError('backend unavailable')

        session = create_sync_session({}, '', '', self.persist, persist_template=failing,
                                      template_id='minimal', timer_factory=ManualTimer)
        with self.assertLogs('builder.sync', level='WARNING'):
            with self.assertRaises(SaveFailed):
                session.set_template('modern')
        self.assertEqual(session.template_id, 'minimal')

    def test_attach_photo(self):
        uploads = []

        def uploader(filename, content_type, data):
            uploads.append(filename)
            return '/media/uploads/portfolio-profile/1-abc.png'

        url = self.session.attach_photo('me.png', 'image/png', b'png-bytes', uploader)
        self.assertEqual(uploads, ['me.png'])
        self.assertEqual(self.session.content['personalInfo']['profilePhoto'], url)

    def test_attach_photo_rejected_before_upload(self):
        """Test invalid files never reach the uploader."""
        uploads = []

        def uploader(*args):
            uploads.append(args)
            return 'never'

        with self.assertRaises(UploadRejected) as ctx:
            self.session.attach_photo('doc.pdf', 'application/pdf', b'%PDF', uploader)
        self.assertEqual(str(ctx.exception), 'Invalid file type. Only images are allowed.')

        with self.assertRaises(UploadRejected):
            self.session.attach_photo('big.png', 'image/png', b'0' * (5 * 1024 * 1024 + 1), uploader)

        self.assertEqual(uploads, [])
        self.assertEqual(self.session.content['personalInfo']['profilePhoto'], '')
        self.assertEqual(self.session.state, SyncState.LOADED)

    def test_attach_photo_upload_failure(self):
        def uploader(*args):
            raise ConnectionError('network down')

        with self.assertRaises(UploadFailed):
            self.session.attach_photo('me.png', 'image/png', b'png', uploader)
        self.assertEqual(self.session.content['personalInfo']['profilePhoto'], '')

    def test_close_stops_auto_save(self):
        self.session.mutate('personalInfo.bio', 'Hello')
        self.session.close()
        ManualTimer.created[-1].fire()
        self.assertEqual(self.persist.calls, [])
        self.assertTrue(self.session.has_unsaved_changes)
