import json

import pytest
import requests


def make_response(status: int, payload=None, url: str = "") -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response._content = json.dumps(payload if payload is not None else {}).encode("utf-8")
    response.encoding = "utf-8"
    response.url = url
    return response


class FakeSession:
    """requests.Session stand-in that replays queued responses per URL"""

    def __init__(self, routes):
        self.routes = {url: list(queue) for url, queue in routes.items()}
        self.headers = {}
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        outcome = self.routes[url].pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class SleepRecorder:
    def __init__(self):
        self.waits = []

    def __call__(self, seconds):
        self.waits.append(seconds)


def make_item(source, skill_id, installs=0, title=None, description=None):
    return {
        "id": f"{source}/{skill_id}",
        "providerId": "skills.sh",
        "source": source,
        "skillId": skill_id,
        "title": title or skill_id,
        "link": f"https://skills.sh/skills/{source}/{skill_id}",
        "installsAllTime": installs,
        "installsTrending": 0,
        "installsHot": 0,
        "firstSeenAt": "2024-01-01T00:00:00.000Z",
        "description": description,
        "skillMdPath": None,
    }


def make_index(items):
    return {
        "updatedAt": "2024-01-01T00:00:00.000Z",
        "sourceUpdatedAt": "2024-01-01T00:00:00.000Z",
        "providerId": "skills.sh",
        "count": len(items),
        "items": items,
    }


@pytest.fixture
def sleeper():
    return SleepRecorder()


@pytest.fixture
def data_dir(tmp_path):
    path = tmp_path / "data"
    path.mkdir()
    return path
