"""
Pytest configuration and fixtures
"""
import pytest
import os
import sys
import tempfile
import shutil
from unittest.mock import Mock

# Add project root to path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from camconfig import ConfigurationProvider
from camconfig.logger import app_logger


LEGACY_ACCESSORS = [
    'get_supported_picture_sizes',
    'get_supported_preview_sizes',
    'get_supported_video_sizes',
    'get_zoom_ratios',
]


def make_legacy_camera(picture=(), preview=(), video=(), zoom=()):
    """Mock legacy camera whose get_parameters() returns a parameter bag"""
    parameters = Mock(spec=LEGACY_ACCESSORS)
    parameters.get_supported_picture_sizes.return_value = list(picture)
    parameters.get_supported_preview_sizes.return_value = list(preview)
    parameters.get_supported_video_sizes.return_value = list(video)
    parameters.get_zoom_ratios.return_value = list(zoom)

    camera = Mock(spec=['get_parameters'])
    camera.get_parameters.return_value = parameters
    return camera


def make_configuration_map(outputs):
    """Mock stream configuration map answering get_output_sizes(target)"""
    configuration_map = Mock(spec=['get_output_sizes'])
    configuration_map.get_output_sizes.side_effect = lambda target: list(outputs.get(target, []))
    return configuration_map


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files"""
    temp_path = tempfile.mkdtemp(prefix="camconfig_test_")
    yield temp_path
    # Cleanup after test
    if os.path.exists(temp_path):
        shutil.rmtree(temp_path)


@pytest.fixture
def temp_config(temp_dir):
    """Path for a temporary config file"""
    return os.path.join(temp_dir, "config.json")


@pytest.fixture
def legacy_camera():
    """Legacy camera with typical rear-sensor capabilities"""
    return make_legacy_camera(
        picture=[(4032, 3024), (1920, 1080)],
        preview=[(1920, 1080), (1280, 720)],
        video=[(3840, 2160), (1920, 1080), (1280, 720)],
        zoom=[100, 150, 200, 400],
    )


@pytest.fixture
def provider():
    """Fresh provider on a platform with the structured API"""
    return ConfigurationProvider(api_level=28)


@pytest.fixture(autouse=True)
def reset_shared_state():
    """Keep the shared provider and debug switch from leaking between tests"""
    yield
    ConfigurationProvider._reset_instance()
    app_logger.set_debug(False)


# Mark slow tests
def pytest_configure(config):
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
