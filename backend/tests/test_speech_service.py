import unittest
from unittest import mock

import requests

from backend.features.spelling_game import config
from backend.features.spelling_game.errors import (
    MissingApiKeyError,
    UpstreamHttpError,
    UpstreamMissingField,
)
from backend.features.spelling_game.services import speech_service


def _speech_response(payload, status_code: int = 200) -> mock.Mock:
    response = mock.Mock()
    response.ok = 200 <= status_code < 300
    response.status_code = status_code
    response.reason = "Unauthorized" if status_code == 401 else "OK"
    response.text = "invalid key"
    response.json.return_value = payload
    return response


@mock.patch.object(config, "UNREAL_SPEECH_API_KEY", "speech-key")
class GetAudioUrlTest(unittest.TestCase):
    @mock.patch.object(speech_service.requests, "post")
    def test_returns_output_uri_with_fixed_voice(self, post: mock.Mock) -> None:
        post.return_value = _speech_response({"OutputUri": "https://cdn.example/garden.mp3"})

        url = speech_service.get_audio_url("garden")

        self.assertEqual(url, "https://cdn.example/garden.mp3")
        self.assertEqual(post.call_args.args[0], config.UNREAL_SPEECH_URL)
        kwargs = post.call_args.kwargs
        self.assertEqual(
            kwargs["json"],
            {
                "Text": "garden",
                "VoiceId": "Dan",
                "Bitrate": "192k",
                "Speed": "0",
                "Pitch": "1",
                "TimestampType": "sentence",
            },
        )
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer speech-key")

    @mock.patch.object(speech_service.requests, "post")
    def test_missing_output_uri(self, post: mock.Mock) -> None:
        post.return_value = _speech_response({"TaskId": "abc"})

        with self.assertRaises(UpstreamMissingField):
            speech_service.get_audio_url("garden")

    @mock.patch.object(speech_service.requests, "post")
    def test_unexpected_output_uri_shapes(self, post: mock.Mock) -> None:
        for payload in ({"OutputUri": 7}, ["OutputUri"], {"OutputUri": ""}):
            with self.subTest(payload=payload):
                post.return_value = _speech_response(payload)

                with self.assertRaises(UpstreamMissingField):
                    speech_service.get_audio_url("garden")

    @mock.patch.object(speech_service.requests, "post")
    def test_error_status_carries_code_and_body(self, post: mock.Mock) -> None:
        post.return_value = _speech_response({}, status_code=401)

        with self.assertRaises(UpstreamHttpError) as ctx:
            speech_service.get_audio_url("garden")
        self.assertEqual(ctx.exception.status_code, 401)
        self.assertIn("invalid key", str(ctx.exception))

    @mock.patch.object(speech_service.requests, "post")
    def test_transport_failure(self, post: mock.Mock) -> None:
        post.side_effect = requests.Timeout("slow")

        with self.assertRaises(UpstreamHttpError):
            speech_service.get_audio_url("garden")

    @mock.patch.object(speech_service.requests, "post")
    def test_missing_key(self, post: mock.Mock) -> None:
        with mock.patch.object(config, "UNREAL_SPEECH_API_KEY", ""):
            with self.assertRaises(MissingApiKeyError) as ctx:
                speech_service.get_audio_url("garden")
        self.assertEqual(ctx.exception.env_name, "UNREAL_SPEECH_API_KEY")
        post.assert_not_called()


if __name__ == "__main__":
    unittest.main()
