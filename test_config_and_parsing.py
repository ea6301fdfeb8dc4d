import os
import unittest
from typing import Dict, List
from unittest.mock import patch

from pydantic import BaseModel

from universal_http import HTTPConfig, RequestOutcome, RequestState, UniversalHTTP
from universal_http.config import DEFAULT_TIMEOUT_SECONDS
from universal_http.core import DecodeError, notify_error
from universal_http.core.response import ModelDecoder


class Item(BaseModel):
    id: int
    name: str


class TestHTTPConfigFromEnv(unittest.TestCase):
    def _from_env(self, env):
        with patch.dict(os.environ, env, clear=True):
            return HTTPConfig.from_env()

    def test_defaults_without_env(self):
        config = self._from_env({})
        self.assertEqual(config.timeout, DEFAULT_TIMEOUT_SECONDS)
        self.assertFalse(config.debug)
        self.assertIsNone(config.user_agent)

    def test_reads_env_values(self):
        config = self._from_env(
            {
                "UNIVERSAL_HTTP_TIMEOUT": "2.5",
                "UNIVERSAL_HTTP_DEBUG": "yes",
                "UNIVERSAL_HTTP_USER_AGENT": "svc/1",
            }
        )
        self.assertEqual(config.timeout, 2.5)
        self.assertTrue(config.debug)
        self.assertEqual(config.user_agent, "svc/1")

    def test_malformed_timeout_falls_back(self):
        self.assertEqual(self._from_env({"UNIVERSAL_HTTP_TIMEOUT": "soon"}).timeout, DEFAULT_TIMEOUT_SECONDS)
        self.assertEqual(self._from_env({"UNIVERSAL_HTTP_TIMEOUT": "-1"}).timeout, DEFAULT_TIMEOUT_SECONDS)

    def test_executor_loads_env_config_when_none_given(self):
        with patch.dict(os.environ, {"UNIVERSAL_HTTP_TIMEOUT": "3"}, clear=True):
            executor = UniversalHTTP(Item)
        self.assertEqual(executor.config.timeout, 3.0)

    def test_dotenv_is_not_reloaded_per_executor(self):
        with patch("universal_http.config.settings.load_dotenv") as load_mock, patch.dict(os.environ, {}, clear=True):
            HTTPConfig.from_env()
            UniversalHTTP(Item)
            UniversalHTTP(List[Item])
        load_mock.assert_not_called()


class TestParseModel(unittest.TestCase):
    def test_parses_matching_payloads(self):
        self.assertEqual(UniversalHTTP(Item, config=HTTPConfig()).parse_model(b'{"id":1,"name":"a"}'), Item(id=1, name="a"))
        self.assertEqual(
            UniversalHTTP(List[Item], config=HTTPConfig()).parse_model(b'[{"id":1,"name":"a"},{"id":2,"name":"b"}]'),
            [Item(id=1, name="a"), Item(id=2, name="b")],
        )
        self.assertEqual(
            UniversalHTTP(Dict[str, int], config=HTTPConfig()).parse_model(b'{"a":1}'),
            {"a": 1},
        )

    def test_returns_none_on_mismatch(self):
        executor = UniversalHTTP(Item, config=HTTPConfig())
        self.assertIsNone(executor.parse_model(b'{"id":"not-a-number"}'))
        self.assertIsNone(executor.parse_model(b"{broken"))
        self.assertIsNone(executor.parse_model(b""))

    def test_mismatch_is_logged_through_structured_logger(self):
        executor = UniversalHTTP(Item, config=HTTPConfig())
        with patch("universal_http.core.response.log_warn") as warn_mock:
            executor.parse_model(b'{"id":"not-a-number"}')
        warn_mock.assert_called_once()
        self.assertIn("Item", warn_mock.call_args.args[0])

    def test_decode_error_carries_status_code(self):
        decoder = ModelDecoder(Item)
        with self.assertRaises(DecodeError) as ctx:
            decoder.decode(b'{"unexpected": true}', status_code=422)
        self.assertEqual(ctx.exception.status_code, 422)


class TestOutcomeAndObserver(unittest.TestCase):
    def test_outcome_unpacks_as_pair(self):
        outcome = RequestOutcome(Item(id=1, name="a"), 200, RequestState.SUCCEEDED, "rid")
        model, status_code = outcome
        self.assertEqual(model.name, "a")
        self.assertEqual(status_code, 200)
        self.assertTrue(outcome.ok)
        self.assertFalse(RequestOutcome(None, 204, RequestState.EMPTY_BODY).ok)

    def test_notify_error_accepts_delegate_and_callable(self):
        seen = []

        class Delegate:
            def error_did_occur(self):
                seen.append("delegate")

        notify_error(Delegate())
        notify_error(lambda: seen.append("callable"))
        notify_error(None)
        self.assertEqual(seen, ["delegate", "callable"])

    def test_notify_error_ignores_unusable_observer(self):
        notify_error(object())


if __name__ == "__main__":
    unittest.main()
