import unittest
from unittest.mock import Mock, patch

import docker
from docker.errors import APIError

from support import make_docker_api
from valman.core.errors import ContainerNotFoundError, RuntimeApiError, RuntimeDataError
from valman.services import container_runtime


class FindContainerTests(unittest.TestCase):
    def test_resolves_slash_prefixed_name_and_reports_ok(self):
        api = make_docker_api()

        snapshot = container_runtime.get_status(api, "valheim", 50)

        self.assertEqual(snapshot.id, "abc123def456789")
        self.assertEqual(snapshot.state, "running")
        self.assertEqual(snapshot.uptime, "Up 2 hours")
        self.assertEqual(snapshot.logs, "line one\nline two\n")
        self.assertEqual(container_runtime.status_image(snapshot.state), "ok")
        api.containers.assert_called_once_with(all=True)
        api.logs.assert_called_once_with(
            "abc123def456789", stdout=True, stderr=False, stream=True, follow=False, tail=50
        )

    def test_name_match_is_case_insensitive(self):
        api = make_docker_api(containers=[
            {"Id": "1", "Names": ["/other"], "State": "running", "Status": "Up"},
            {"Id": "2", "Names": ["/Valheim"], "State": "exited", "Status": "Exited (0)"},
        ])

        self.assertEqual(container_runtime.find_container(api, "VALHEIM"), ("2", "exited", "Exited (0)"))

    def test_only_other_container_is_not_found(self):
        api = make_docker_api(containers=[
            {"Id": "1", "Names": ["/other"], "State": "running", "Status": "Up 2 hours"},
        ])

        with self.assertRaises(ContainerNotFoundError) as caught:
            container_runtime.get_status(api, "valheim", 10)
        self.assertIsInstance(caught.exception, RuntimeDataError)
        api.logs.assert_not_called()

    def test_missing_fields_are_data_errors(self):
        for missing in ("Id", "State", "Status"):
            record = {"Id": "1", "Names": ["/valheim"], "State": "running", "Status": "Up"}
            del record[missing]
            api = make_docker_api(containers=[record])
            with self.subTest(missing=missing), self.assertRaises(RuntimeDataError):
                container_runtime.find_container(api, "valheim")

    def test_runtime_transport_errors_are_api_errors(self):
        api = Mock()
        api.containers.side_effect = ConnectionError("socket missing")

        with self.assertRaises(RuntimeApiError):
            container_runtime.find_container(api, "valheim")

    def test_status_image_for_stopped_container(self):
        self.assertEqual(container_runtime.status_image("exited"), "cross")
        self.assertEqual(container_runtime.status_image(None), "cross")


class FetchLogsTests(unittest.TestCase):
    def test_undecodable_chunks_are_dropped(self):
        api = make_docker_api(logs=[b"ok\n", b"\xff\xfe\n", b"still ok\n"])
        log_action = Mock()

        logs = container_runtime.fetch_logs(api, "abc123def456789", 100, log_action=log_action)

        self.assertEqual(logs, "ok\nstill ok\n")
        log_action.assert_called_once()

    def test_stream_error_keeps_lines_read_so_far(self):
        def broken_stream():
            yield b"first\n"
            raise APIError("stream closed")

        api = Mock()
        api.logs.return_value = broken_stream()

        self.assertEqual(container_runtime.fetch_logs(api, "abc", 100), "first\n")

    def test_tail_request_never_follows_the_stream(self):
        api = docker.APIClient(base_url="unix:///var/run/docker.sock", version="1.41")

        with patch.object(api, "_get") as get, patch.object(
            api, "_get_result", return_value=iter([b"tail line\n"])
        ):
            logs = container_runtime.fetch_logs(api, "abc123def456789", 100)

        self.assertEqual(logs, "tail line\n")
        params = get.call_args.kwargs["params"]
        self.assertEqual(params["follow"], 0)
        self.assertEqual(params["tail"], 100)
        self.assertEqual(params["stderr"], 0)


class RestartTests(unittest.TestCase):
    def test_restart_uses_ten_second_grace(self):
        api = make_docker_api()

        container_runtime.restart(api, "valheim")

        api.restart.assert_called_once_with("abc123def456789", timeout=10)

    def test_restart_errors_are_surfaced(self):
        api = make_docker_api()
        api.restart.side_effect = APIError("conflict")

        with self.assertRaises(RuntimeApiError):
            container_runtime.restart(api, "valheim")
        self.assertEqual(api.restart.call_count, 1)


if __name__ == "__main__":
    unittest.main()
