"""Tests for the transcription client and the UI session state."""

import os
import tempfile
import unittest
from unittest.mock import MagicMock, patch

import requests

from newsdesk.client import TranscriberClient
from newsdesk.errors import NetworkUnreachable, PayloadTooLarge, ReadError, TranscriptionError
from newsdesk.models import Article, Channel, InputMode, View
from newsdesk.news import ArticleStore
from newsdesk.session import (
    MISSING_INPUT_MESSAGE,
    UNREACHABLE_MESSAGE,
    AppState,
    NewsViewState,
    TranscriberState,
)


def make_response(status_code, body):
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = status_code < 400
    resp.json.return_value = body
    return resp


class TestTranscriberClient(unittest.TestCase):

    def setUp(self):
        self.session = MagicMock()
        self.client = TranscriberClient("http://api.test/", max_upload_bytes=10, session=self.session)
        self.folder = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.folder.cleanup()

    def write_file(self, name, data):
        path = os.path.join(self.folder.name, name)
        with open(path, "wb") as f:
            f.write(data)
        return path

    def test_url_success(self):
        self.session.post.return_value = make_response(200, {"transcript": "hello"})
        self.assertEqual(self.client.transcribe_url("https://youtu.be/SA2iWivDJiE"), "hello")
        self.session.post.assert_called_once_with(
            "http://api.test/api/transcribe-youtube", json={"url": "https://youtu.be/SA2iWivDJiE"}, timeout=None
        )

    def test_file_payload(self):
        self.session.post.return_value = make_response(200, {"transcript": "hi"})
        path = self.write_file("clip.mp3", b"12345")
        self.assertEqual(self.client.transcribe_file(path), "hi")
        _, kwargs = self.session.post.call_args
        self.assertEqual(kwargs["json"], {"fileData": "MTIzNDU=", "mimeType": "audio/mpeg"})

    def test_file_over_ceiling_is_not_sent(self):
        path = self.write_file("clip.mp4", b"x" * 11)
        with self.assertRaises(PayloadTooLarge):
            self.client.transcribe_file(path)
        self.session.post.assert_not_called()

    @patch("newsdesk.client.encode_file")
    def test_file_over_ceiling_is_never_read(self, mock_encode):
        path = self.write_file("long.mp4", b"x" * 1024)
        with self.assertRaises(PayloadTooLarge):
            self.client.transcribe_file(path)
        mock_encode.assert_not_called()
        self.session.post.assert_not_called()

    def test_missing_file(self):
        with self.assertRaises(ReadError):
            self.client.transcribe_file(os.path.join(self.folder.name, "gone.mp3"))
        self.session.post.assert_not_called()

    def test_connection_error(self):
        self.session.post.side_effect = requests.ConnectionError("refused")
        with self.assertRaises(NetworkUnreachable):
            self.client.transcribe_url("https://youtu.be/SA2iWivDJiE")

    def test_error_response(self):
        self.session.post.return_value = make_response(413, {"error": "too big"})
        with self.assertRaises(TranscriptionError) as ctx:
            self.client.transcribe_url("https://youtu.be/SA2iWivDJiE")
        self.assertEqual(ctx.exception.message, "too big")
        self.assertEqual(ctx.exception.status_code, 413)
        self.assertNotIsInstance(ctx.exception, NetworkUnreachable)

    def test_error_response_without_body(self):
        resp = make_response(502, None)
        resp.json.side_effect = ValueError("no json")
        self.session.post.return_value = resp
        with self.assertRaises(TranscriptionError) as ctx:
            self.client.transcribe_url("https://youtu.be/SA2iWivDJiE")
        self.assertEqual(ctx.exception.status_code, 502)


class TestTranscriberState(unittest.TestCase):

    def setUp(self):
        self.client = MagicMock()
        self.state = TranscriberState()

    def test_switch_mode_resets_everything(self):
        self.state.set_url("https://youtu.be/SA2iWivDJiE")
        self.state.transcript = "old"
        self.state.error = "old error"
        self.state.is_copied = True
        self.state.switch_mode(InputMode.FILE)
        self.assertEqual(self.state.input_mode, InputMode.FILE)
        self.assertEqual(self.state, TranscriberState(input_mode=InputMode.FILE))

        self.state.select_file("/tmp/a.mp3")
        self.state.switch_mode(InputMode.URL)
        self.assertIsNone(self.state.file_path)
        self.assertEqual(self.state.file_name, "")

    def test_empty_input(self):
        self.assertFalse(self.state.submit(self.client))
        self.assertEqual(self.state.error, MISSING_INPUT_MESSAGE)
        self.client.transcribe_url.assert_not_called()

    def test_url_submit(self):
        self.client.transcribe_url.return_value = "transcript"
        self.state.set_url("https://youtu.be/SA2iWivDJiE")
        self.assertTrue(self.state.submit(self.client))
        self.assertEqual(self.state.transcript, "transcript")
        self.assertFalse(self.state.is_loading)
        self.assertTrue(self.state.copy_transcript())

    def test_file_submit(self):
        self.client.transcribe_file.return_value = "transcript"
        self.state.switch_mode(InputMode.FILE)
        self.state.select_file("/media/interview.m4a")
        self.assertEqual(self.state.file_name, "interview.m4a")
        self.assertTrue(self.state.submit(self.client))
        self.client.transcribe_file.assert_called_once_with("/media/interview.m4a")

    def test_no_resubmit_while_loading(self):
        self.state.set_url("https://youtu.be/SA2iWivDJiE")
        self.state.is_loading = True
        self.assertFalse(self.state.submit(self.client))
        self.client.transcribe_url.assert_not_called()

    def test_network_and_server_errors_differ(self):
        self.state.set_url("https://youtu.be/SA2iWivDJiE")
        self.client.transcribe_url.side_effect = NetworkUnreachable("refused")
        self.state.submit(self.client)
        self.assertEqual(self.state.error, UNREACHABLE_MESSAGE)
        self.assertFalse(self.state.is_loading)

        self.client.transcribe_url.side_effect = TranscriptionError("Video too long", status_code=400)
        self.state.submit(self.client)
        self.assertEqual(self.state.error, "Transcription failed: Video too long")
        self.assertEqual(self.state.transcript, "")

    def test_copy_without_transcript(self):
        self.assertFalse(self.state.copy_transcript())


class TestAppState(unittest.TestCase):

    def test_defaults_and_switch(self):
        state = AppState()
        self.assertEqual(state.current_view, View.NEWS)
        state.switch_view(View.TRANSCRIBER)
        self.assertEqual(state.current_view, View.TRANSCRIBER)
        with self.assertRaises(ValueError):
            state.switch_view("settings")

    def test_news_not_yet_queried_vs_empty(self):
        store = ArticleStore(
            [Channel(id="a", name="A")],
            [Article(id=1, channel_id="a", title="Election", content="Body", date="2024-01-01")],
        )
        news = NewsViewState()
        self.assertIsNone(news.results)
        news.search_query = "nothing matches"
        self.assertEqual(news.refresh(store), [])
        self.assertEqual(news.results, [])


if __name__ == "__main__":
    unittest.main()
