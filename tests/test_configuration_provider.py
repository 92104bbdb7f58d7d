"""
Tests for size / zoom-ratio resolution and caching in ConfigurationProvider
"""
import threading
import time
import pytest
from unittest.mock import Mock

from camconfig import (
    CameraFace,
    CameraSizeFor,
    ConfigurationProvider,
    InvalidArgumentError,
    Size,
    UnsupportedBackendError,
    get_configuration_provider,
)
from camconfig.camera import (
    CameraType,
    LegacyCameraAdapter,
    OutputTarget,
    StructuredCameraAdapter,
    size_key,
)

from conftest import make_configuration_map, make_legacy_camera


REAR = CameraFace.FACE_REAR
FRONT = CameraFace.FACE_FRONT
PICTURE = CameraSizeFor.SIZE_FOR_PICTURE
PREVIEW = CameraSizeFor.SIZE_FOR_PREVIEW


def preview_accessor(camera):
    return camera.get_parameters.return_value.get_supported_preview_sizes


# =============================================================================
# Size Resolution Tests
# =============================================================================

class TestResolveSizes:
    """Test resolve_sizes caching behaviour"""

    def test_cached_after_first_call(self, provider, legacy_camera):
        """Two identical calls query the backend once"""
        first = provider.resolve_sizes(legacy_camera, REAR, PREVIEW)
        second = provider.resolve_sizes(legacy_camera, REAR, PREVIEW)

        assert first == second == (Size(1920, 1080), Size(1280, 720))
        assert second is first
        preview_accessor(legacy_camera).assert_called_once()

    def test_hardware_change_ignored_while_cached(self, provider):
        """Rear preview on the legacy backend keeps its first answer"""
        camera = make_legacy_camera(preview=[(1920, 1080), (1280, 720)])

        first = provider.resolve_sizes(camera, REAR, PREVIEW)
        preview_accessor(camera).return_value = []
        second = provider.resolve_sizes(camera, REAR, PREVIEW)

        assert first == (Size(1920, 1080), Size(1280, 720))
        assert second == (Size(1920, 1080), Size(1280, 720))
        assert size_key(REAR, PREVIEW, CameraType.TYPE_CAMERA1) in provider.size_cache

    def test_cache_disabled_queries_every_time(self, provider, legacy_camera):
        provider.set_caching_enabled(False)

        first = provider.resolve_sizes(legacy_camera, REAR, PREVIEW)
        second = provider.resolve_sizes(legacy_camera, REAR, PREVIEW)

        assert first == second
        assert preview_accessor(legacy_camera).call_count == 2
        assert len(provider.size_cache) == 0

    def test_cache_disabled_sees_hardware_change(self, provider, legacy_camera):
        provider.set_caching_enabled(False)

        provider.resolve_sizes(legacy_camera, REAR, PREVIEW)
        preview_accessor(legacy_camera).return_value = [(640, 480)]

        assert provider.resolve_sizes(legacy_camera, REAR, PREVIEW) == (Size(640, 480),)

    def test_reenabling_keeps_entries(self, provider, legacy_camera):
        provider.resolve_sizes(legacy_camera, REAR, PREVIEW)
        provider.set_caching_enabled(False)
        provider.set_caching_enabled(True)

        provider.resolve_sizes(legacy_camera, REAR, PREVIEW)
        preview_accessor(legacy_camera).assert_called_once()

    def test_faces_cached_separately(self, provider, legacy_camera):
        provider.resolve_sizes(legacy_camera, REAR, PREVIEW)
        provider.resolve_sizes(legacy_camera, FRONT, PREVIEW)

        assert preview_accessor(legacy_camera).call_count == 2
        assert len(provider.size_cache) == 2

    def test_backends_isolated(self, provider):
        """Legacy and structured picture sizes of one device keep their own entries"""
        camera = make_legacy_camera(picture=[(4032, 3024)])
        configuration_map = make_configuration_map({OutputTarget.JPEG: [(4000, 3000), (2000, 1500)]})

        legacy = provider.resolve_sizes(camera, REAR, PICTURE)
        structured = provider.resolve_sizes(configuration_map, REAR, PICTURE)

        assert legacy == (Size(4032, 3024),)
        assert structured == (Size(4000, 3000), Size(2000, 1500))
        assert provider.resolve_sizes(camera, REAR, PICTURE) == legacy
        assert provider.resolve_sizes(configuration_map, REAR, PICTURE) == structured
        assert len(provider.size_cache) == 2

    def test_accepts_adapters(self, provider, legacy_camera):
        adapter = LegacyCameraAdapter(legacy_camera)
        assert provider.resolve_sizes(adapter, REAR, PREVIEW) == provider.resolve_sizes(legacy_camera, REAR, PREVIEW)
        preview_accessor(legacy_camera).assert_called_once()

    def test_raw_axis_values(self, provider, legacy_camera):
        assert provider.resolve_sizes(legacy_camera, 1, 1) == (Size(1920, 1080), Size(1280, 720))

    @pytest.mark.parametrize("size_for", [3, "SIZE_FOR_AUDIO"])
    def test_unsupported_size_for_both_backends(self, provider, legacy_camera, size_for):
        configuration_map = make_configuration_map({})

        with pytest.raises(InvalidArgumentError):
            provider.resolve_sizes(legacy_camera, REAR, size_for)
        with pytest.raises(InvalidArgumentError):
            provider.resolve_sizes(configuration_map, REAR, size_for)
        assert len(provider.size_cache) == 0

    def test_failure_not_cached(self, provider, legacy_camera):
        preview_accessor(legacy_camera).side_effect = [RuntimeError("HAL unavailable"), [(800, 600)]]

        with pytest.raises(RuntimeError, match="HAL unavailable"):
            provider.resolve_sizes(legacy_camera, REAR, PREVIEW)
        assert len(provider.size_cache) == 0

        assert provider.resolve_sizes(legacy_camera, REAR, PREVIEW) == (Size(800, 600),)

    def test_empty_result_cached(self, provider):
        camera = make_legacy_camera(video=[])

        assert provider.resolve_sizes(camera, REAR, CameraSizeFor.SIZE_FOR_VIDEO) == ()
        provider.resolve_sizes(camera, REAR, CameraSizeFor.SIZE_FOR_VIDEO)
        camera.get_parameters.return_value.get_supported_video_sizes.assert_called_once()

    def test_result_is_read_only(self, provider, legacy_camera):
        sizes = provider.resolve_sizes(legacy_camera, REAR, PREVIEW)
        with pytest.raises((TypeError, AttributeError)):
            sizes.append(Size(1, 1))

    def test_clear_cache(self, provider, legacy_camera):
        provider.resolve_sizes(legacy_camera, REAR, PREVIEW)
        provider.clear_cache()
        provider.resolve_sizes(legacy_camera, REAR, PREVIEW)

        assert preview_accessor(legacy_camera).call_count == 2


# =============================================================================
# Backend Selection Tests
# =============================================================================

class TestBackendSelection:
    """Test adapter selection from the declared platform level"""

    def test_camera_type_from_platform(self):
        assert ConfigurationProvider(api_level=19).camera_type is CameraType.TYPE_CAMERA1
        assert ConfigurationProvider(api_level=28).camera_type is CameraType.TYPE_CAMERA2

    def test_structured_source_on_old_platform(self):
        provider = ConfigurationProvider(api_level=19)

        with pytest.raises(UnsupportedBackendError):
            provider.resolve_sizes(make_configuration_map({}), REAR, PREVIEW)

    def test_adapter_for(self, provider, legacy_camera):
        assert isinstance(provider.adapter_for(legacy_camera), LegacyCameraAdapter)
        assert isinstance(provider.adapter_for(make_configuration_map({})), StructuredCameraAdapter)


# =============================================================================
# Zoom Ratio Tests
# =============================================================================

class TestResolveZoomRatios:
    """Test resolve_zoom_ratios"""

    def test_scaled_in_order(self, provider):
        camera = make_legacy_camera(zoom=[0, 100, 250])
        assert provider.resolve_zoom_ratios(camera, REAR) == pytest.approx((0.0, 1.0, 2.5))

    def test_cached(self, provider, legacy_camera):
        first = provider.resolve_zoom_ratios(legacy_camera, REAR)
        legacy_camera.get_parameters.return_value.get_zoom_ratios.return_value = [100]
        second = provider.resolve_zoom_ratios(legacy_camera, REAR)

        assert second is first
        assert first == pytest.approx((1.0, 1.5, 2.0, 4.0))
        legacy_camera.get_parameters.return_value.get_zoom_ratios.assert_called_once()

    def test_cache_disabled(self, provider, legacy_camera):
        provider.set_caching_enabled(False)

        provider.resolve_zoom_ratios(legacy_camera, REAR)
        provider.resolve_zoom_ratios(legacy_camera, REAR)

        assert legacy_camera.get_parameters.return_value.get_zoom_ratios.call_count == 2
        assert len(provider.ratio_cache) == 0

    def test_separate_from_size_cache(self, provider, legacy_camera):
        provider.resolve_zoom_ratios(legacy_camera, REAR)
        provider.resolve_sizes(legacy_camera, REAR, PICTURE)

        assert len(provider.ratio_cache) == 1
        assert len(provider.size_cache) == 1

    def test_structured_backend_rejected(self, provider):
        with pytest.raises(UnsupportedBackendError):
            provider.resolve_zoom_ratios(make_configuration_map({}), REAR)

    def test_invalid_face(self, provider, legacy_camera):
        with pytest.raises(InvalidArgumentError):
            provider.resolve_zoom_ratios(legacy_camera, 9)


# =============================================================================
# Concurrency Tests
# =============================================================================

class TestConcurrency:
    """Test shared provider and cache under threads"""

    def test_singleton_concurrent_first_access(self):
        ConfigurationProvider._reset_instance()
        barrier = threading.Barrier(16)
        results = []
        lock = threading.Lock()

        def worker():
            barrier.wait()
            instance = get_configuration_provider()
            with lock:
                results.append(instance)

        threads = [threading.Thread(target=worker) for _ in range(16)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)

        assert len(results) == 16
        assert all(r is results[0] for r in results)
        assert ConfigurationProvider.instance() is results[0]

    def test_same_key_queried_once(self, provider):
        camera = make_legacy_camera()

        def slow_preview_sizes():
            time.sleep(0.05)
            return [(1920, 1080)]

        preview_accessor(camera).side_effect = slow_preview_sizes
        barrier = threading.Barrier(8)
        results = []
        lock = threading.Lock()

        def worker():
            barrier.wait()
            sizes = provider.resolve_sizes(camera, REAR, PREVIEW)
            with lock:
                results.append(sizes)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)

        assert len(results) == 8
        assert all(r == (Size(1920, 1080),) for r in results)
        preview_accessor(camera).assert_called_once()

    def test_different_keys_do_not_block(self, provider):
        camera = make_legacy_camera(picture=[(4032, 3024)])
        started = threading.Event()
        release = threading.Event()

        def blocked_preview_sizes():
            started.set()
            release.wait(timeout=5)
            return [(1920, 1080)]

        preview_accessor(camera).side_effect = blocked_preview_sizes
        thread = threading.Thread(target=provider.resolve_sizes, args=(camera, REAR, PREVIEW))
        thread.start()
        try:
            assert started.wait(timeout=5)

            assert provider.resolve_sizes(camera, REAR, PICTURE) == (Size(4032, 3024),)
            assert thread.is_alive()
        finally:
            release.set()
            thread.join(timeout=5)

        assert provider.resolve_sizes(camera, REAR, PREVIEW) == (Size(1920, 1080),)


# =============================================================================
# Debug Toggle Tests
# =============================================================================

class TestDebugToggle:
    """Test the debug switch forwarding"""

    def test_set_debug_forwards_to_logger(self, provider):
        from camconfig.logger import app_logger

        provider.set_debug(True)
        assert provider.debug is True
        assert app_logger.is_debug() is True

        provider.debug = False
        assert app_logger.is_debug() is False

    def test_debug_does_not_change_results(self, provider, legacy_camera):
        provider.set_debug(True)
        with_debug = provider.resolve_sizes(legacy_camera, REAR, PREVIEW)
        provider.clear_cache()
        provider.set_debug(False)

        assert provider.resolve_sizes(legacy_camera, REAR, PREVIEW) == with_debug

    def test_debug_messages_reach_callbacks(self, provider, legacy_camera):
        from camconfig.logger import app_logger

        callback = Mock()
        app_logger.add_callback(callback)
        try:
            provider.set_debug(True)
            provider.resolve_sizes(legacy_camera, REAR, PREVIEW)
        finally:
            app_logger.remove_callback(callback)

        messages = [call[0][0] for call in callback.call_args_list]
        assert any("cache miss" in message for message in messages)
