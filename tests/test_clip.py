import json
import logging

import pytest

from config import ClipConfig
from speedclip.clip import clip_document, clip_file, clip_profile
from speedclip.durations import MICROSECOND as US, MILLISECOND as MS, SECOND
from speedclip.errors import InvalidWindowError, MalformedDocumentError, MisalignedArraysError
from speedclip.profile import SampledProfile, SpeedscopeDocument


def make_profile(name="cpu", n=10, weight=10, unit="milliseconds", start=0, **extra):
    raw = {
        "type": "sampled",
        "name": name,
        "unit": unit,
        "startValue": start,
        "endValue": start + n * weight,
        "samples": [[i] for i in range(n)],
        "weights": [weight] * n,
    }
    raw.update(extra)
    return SampledProfile.from_dict(raw)


def make_document(*profiles):
    return {
        "$schema": "https://www.speedscope.app/file-format-schema.json",
        "shared": {"frames": [{"name": "main"}, {"name": "work"}]},
        "exporter": "py-spy@0.3.14",
        "activeProfileIndex": 0,
        "profiles": [p.raw for p in profiles],
    }


def test_clip_profile_end_to_end(caplog):
    profile = make_profile()
    with caplog.at_level(logging.INFO, logger="speedclip.clip"):
        result = clip_profile(profile, 25 * MS, 65 * MS)
    assert (result.start_index, result.end_index) == (2, 7)
    assert profile.raw["samples"] == [[2], [3], [4], [5], [6]]
    assert profile.raw["weights"] == [10] * 5
    assert profile.raw["startValue"] == 30
    assert profile.raw["endValue"] == 70
    assert "cpu kept 5/10: 2 -> 7" in caplog.text


def test_lengths_stay_aligned_with_bounds():
    profile = make_profile(n=25, weight=4)
    result = clip_profile(profile, 13 * MS, -31 * MS)
    assert len(profile.samples) == len(profile.weights) == result.end_index - result.start_index


def test_full_window_leaves_profile_untouched():
    profile = make_profile(start=3)
    before = json.loads(json.dumps(profile.raw))
    clip_profile(profile, 0, 0)
    assert profile.raw == before
    clip_profile(profile, -500 * MS, 103 * MS)
    assert profile.raw == before


def test_negative_start_behaves_like_offset_from_end():
    a = make_profile()
    b = make_profile()
    clip_profile(a, -20 * MS, 0)
    clip_profile(b, 80 * MS, 0)
    assert a.raw == b.raw
    assert a.raw["samples"] == [[8], [9]]
    assert a.raw["startValue"] == 90
    assert a.raw["endValue"] == 100


def test_reclipping_with_same_open_start_window_is_stable():
    profile = make_profile()
    clip_profile(profile, 0, 65 * MS)
    once = json.loads(json.dumps(profile.raw))
    clip_profile(profile, 0, 65 * MS)
    assert profile.raw == once
    assert once["endValue"] == 70
    assert len(once["samples"]) == 7


def test_reclipping_front_trimmed_profile_with_open_window_is_noop():
    profile = make_profile()
    clip_profile(profile, 25 * MS, 65 * MS)
    once = json.loads(json.dumps(profile.raw))
    clip_profile(profile, 0, 0)
    assert profile.raw == once


def test_ordering_error_names_profile_and_keeps_data():
    profile = make_profile(name="worker")
    with pytest.raises(InvalidWindowError, match="profile 'worker'"):
        clip_profile(profile, 50 * MS, 10 * MS)
    assert len(profile.raw["samples"]) == 10
    assert profile.raw["startValue"] == 0


def test_nonzero_start_value():
    profile = make_profile(start=1000)
    clip_profile(profile, 25 * MS, 65 * MS)
    assert profile.raw["startValue"] == 1030
    assert profile.raw["endValue"] == 1070


def test_microseconds_profile():
    profile = make_profile(n=8, weight=250, unit="microseconds")
    result = clip_profile(profile, 600 * US, 1100 * US)
    assert (result.start_index, result.end_index) == (2, 5)
    assert profile.raw["startValue"] == 750
    assert profile.raw["endValue"] == 1250


def test_unknown_unit_defaults_to_seconds(caplog):
    profile = make_profile(n=4, weight=1, unit="bytes")
    with caplog.at_level(logging.WARNING):
        clip_profile(profile, 1500 * MS, 2500 * MS)
    assert profile.raw["samples"] == [[1], [2]]
    assert profile.raw["startValue"] == 2
    assert profile.raw["endValue"] == 3
    assert "bytes" in caplog.text


def test_fallback_unit_override():
    profile = make_profile(n=4, weight=1, unit="none")
    clip_profile(profile, 1500 * US, 2500 * US, fallback_unit="milliseconds")
    assert profile.raw["samples"] == [[1], [2]]


def test_misaligned_after_parse_is_rejected():
    profile = make_profile()
    profile.weights = profile.weights[:-1]
    with pytest.raises(MisalignedArraysError):
        clip_profile(profile, 25 * MS, 65 * MS)


def test_clip_document_resolves_window_per_profile():
    doc = SpeedscopeDocument.from_dict(make_document(make_profile("long"), make_profile("short", n=5)))
    results = clip_document(doc, -20 * MS, 0)
    assert [(r.start_index, r.end_index) for r in results] == [(8, 10), (3, 5)]
    out = doc.to_dict()
    assert [p["name"] for p in out["profiles"]] == ["long", "short"]
    assert out["profiles"][1]["samples"] == [[3], [4]]
    assert out["profiles"][1]["startValue"] == 40


def test_clip_document_aborts_on_first_failure():
    doc = SpeedscopeDocument.from_dict(make_document(make_profile("first"), make_profile("second", n=5)))
    with pytest.raises(InvalidWindowError, match="second"):
        clip_document(doc, 40 * MS, -20 * MS)
    first = doc.raw["profiles"][0]
    assert len(first["samples"]) == len(first["weights"]) == 10
    assert first["startValue"] == 0
    assert first["endValue"] == 100


def test_clip_file_round_trip(tmp_path):
    src = tmp_path / "profile.json"
    dst = tmp_path / "clipped.json"
    src.write_text(json.dumps(make_document(make_profile())), encoding="utf-8")

    results = clip_file(src, dst, 25 * MS, 65 * MS)

    assert results[0].kept == 5
    out = json.loads(dst.read_text(encoding="utf-8"))
    assert out["shared"] == {"frames": [{"name": "main"}, {"name": "work"}]}
    assert out["exporter"] == "py-spy@0.3.14"
    assert out["$schema"].endswith("file-format-schema.json")
    assert out["profiles"][0]["startValue"] == 30
    assert out["profiles"][0]["endValue"] == 70
    assert out["profiles"][0]["type"] == "sampled"


def test_clip_file_to_stdout(tmp_path, capsys):
    src = tmp_path / "profile.json"
    src.write_text(json.dumps(make_document(make_profile())), encoding="utf-8")
    clip_file(src, "-", 10 * SECOND, 0)
    out = json.loads(capsys.readouterr().out)
    assert out["profiles"][0]["samples"] == []


def test_clip_file_writes_nothing_on_failure(tmp_path):
    src = tmp_path / "profile.json"
    dst = tmp_path / "clipped.json"
    doc = make_document(make_profile())
    doc["profiles"].append({"type": "evented", "name": "events", "unit": "milliseconds"})
    src.write_text(json.dumps(doc), encoding="utf-8")

    with pytest.raises(MalformedDocumentError, match="events"):
        clip_file(src, dst, 25 * MS, 65 * MS)
    assert not dst.exists()


def test_clip_file_uses_config_for_output(tmp_path):
    src = tmp_path / "profile.json"
    dst = tmp_path / "clipped.json"
    src.write_text(json.dumps(make_document(make_profile(name="cpu é"))), encoding="utf-8")
    cfg = ClipConfig(json_indent=2, ensure_ascii=True)
    clip_file(src, dst, 0, 0, cfg)
    text = dst.read_text(encoding="utf-8")
    assert "\n  " in text
    assert "\\u00e9" in text


def test_end_resolving_to_zero_keeps_everything_after_start():
    profile = make_profile()
    result = clip_profile(profile, 0, -100 * MS)
    assert result.end_index == 10
    assert profile.raw["endValue"] == 100
    assert len(profile.raw["samples"]) == 10


def test_large_bytes_profile_does_not_wrap():
    profile = make_profile(n=4, weight=3_000_000_000, unit="bytes")
    result = clip_profile(profile, 10_000_000_000 * SECOND, 0)
    assert (result.start_index, result.end_index) == (3, 4)
    assert profile.raw["samples"] == [[3]]
    assert profile.raw["startValue"] == 12_000_000_000
