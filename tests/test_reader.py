"""Tests for amdgpu_settings.reader - reading control files for display."""

from __future__ import annotations

from amdgpu_settings.paths import resolve_device
from amdgpu_settings.reader import DeviceReader, format_power
from tests.conftest import RecordingWriter, make_card


class TestDeviceReader:
    def test_read_values(self, drm_root, card0):
        state = DeviceReader(resolve_device(0, str(drm_root))).read()
        assert state["performance level"] == "auto"
        assert state["power cap"] == "200000000"
        assert state["default power cap"] == "220000000"
        assert state["fan zero RPM enable"] == "0"
        assert state["memory clock levels"] is None

    def test_missing_fan_files_are_none(self, drm_root):
        make_card(drm_root, fan_files=())
        state = DeviceReader(resolve_device(0, str(drm_root))).read()
        assert state["fan target temperature"] is None
        assert state["fan zero RPM stop temperature"] is None

    def test_reads_through_injected_reader(self, paths):
        reader = RecordingWriter(reads={paths.power_cap: "150000000"})
        state = DeviceReader(paths, reader).read()
        assert state["power cap"] == "150000000"
        assert state["performance level"] is None

    def test_render(self, drm_root, card0):
        text = DeviceReader(resolve_device(0, str(drm_root))).render()
        assert "performance level: auto" in text
        assert "power cap: 200.0 W" in text
        assert "memory clock levels: unavailable" in text
        assert "    1: 2500Mhz *" in text


class TestFormatPower:
    def test_watts(self):
        assert format_power("180000000") == "180.0 W"

    def test_none(self):
        assert format_power(None) is None

    def test_not_a_number(self):
        assert format_power("n/a") == "n/a"
