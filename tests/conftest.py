"""Shared fixtures: sample TGAZ payloads and a recording fake fetcher."""

from __future__ import annotations

import json

import pytest

from gazetteer.dispatcher import ToolDispatcher
from gazetteer.errors import UpstreamError
from gazetteer.models import UpstreamRequest
from gazetteer.query import QueryBuilder

BASE_URL = "http://gazetteer.test/tgaz"


class FakeFetcher:
    """Stands in for gazetteer.http.fetch_text; records every request."""

    def __init__(self, body: str = "", error: UpstreamError | None = None) -> None:
        self.body = body
        self.error = error
        self.requests: list[UpstreamRequest] = []

    def __call__(self, request: UpstreamRequest) -> str:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.body


@pytest.fixture
def builder() -> QueryBuilder:
    return QueryBuilder(BASE_URL)


@pytest.fixture
def make_dispatcher(builder):
    def _make(body: str = "", error: UpstreamError | None = None):
        fetcher = FakeFetcher(body, error)
        return ToolDispatcher(builder, fetch=fetcher), fetcher

    return _make


@pytest.fixture
def place_payload() -> dict:
    return {
        "sys_id": "hvd_32180",
        "uri": "http://maps.cga.harvard.edu/tgaz/placename/hvd_32180",
        "license": "CC BY-NC 4.0",
        "data source": "CHGIS",
        "spellings": [
            {"written form": "蘇州", "script": "traditional Chinese"},
            {"written form": "Suzhou", "script": "Pinyin"},
        ],
        "feature-type": {"name": "州", "transcription": "zhou", "translation": "prefecture"},
        "temporal": {"begin": 589, "end": 1112},
        "spatial": {
            "object-type": "POINT",
            "degrees-latitude": "31.30",
            "degrees-longitude": "120.60",
            "present-location": "  Suzhou City, Jiangsu  ",
        },
    }


@pytest.fixture
def search_payload() -> dict:
    return {
        "memo": "Search for placename: 蘇州",
        "count of displayed results": "2",
        "count of total results": "2",
        "placenames": [
            {
                "sys_id": "hvd_32180",
                "name": "蘇州",
                "transcription": "Suzhou",
                "years": "589 ~ 1112",
                "feature type": "州 zhou",
                "parent name": "浙西路",
                "xy coordinates": "120.60, 31.30",
                "data source": "CHGIS",
                "uri": "http://maps.cga.harvard.edu/tgaz/placename/hvd_32180",
            },
            {
                "sys_id": "hvd_32181",
                "name": "蘇州府",
                "transcription": "Suzhou Fu",
                "years": "1368 ~ 1911",
                "feature type": "府 fu",
                "parent name": "江蘇",
                "data source": "CHGIS",
                "uri": "http://maps.cga.harvard.edu/tgaz/placename/hvd_32181",
            },
        ],
    }


@pytest.fixture
def context_xml() -> str:
    return """<?xml version="1.0" encoding="UTF-8"?>
<placename id="hvd_9999">
  <spellings>
    <spelling><written-form script="traditional Chinese">平江府</written-form></spelling>
    <spelling><written-form>Pingjiang Fu</written-form></spelling>
  </spellings>
  <temporal><begin>906</begin><end>1127</end></temporal>
  <historical-context>
    <part-of from="906" to="1000"><parent-name>兩浙路</parent-name></part-of>
    <part-of from="1001" to="1127"><parent-id>hvd_1</parent-id></part-of>
    <part-of><parent-name>浙西路</parent-name></part-of>
  </historical-context>
  <subordinate-units>
    <subordinate-unit from="906" to="1127"><name>吳縣</name><transcribed-name>Wu Xian</transcribed-name></subordinate-unit>
    <subordinate-unit><transcribed-name>Nameless</transcribed-name></subordinate-unit>
    <subordinate-unit><name>長洲縣</name></subordinate-unit>
  </subordinate-units>
</placename>
"""


@pytest.fixture
def as_json():
    return lambda payload: json.dumps(payload, ensure_ascii=False)
