"""Pytest configuration for spheretrace tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which would
    discard every field declared by the modules under test.
    """
    ti.init(arch=ti.cpu)
    yield


@pytest.fixture(autouse=True)
def reset_scene_state():
    """Restore default sphere, light, camera and framebuffer before each test.

    This ensures tests are isolated from each other.
    """
    # Import here so the modules declare their fields after ti.init()
    from src.spheretrace.camera.pinhole import PinholeCamera, setup_camera
    from src.spheretrace.core.integrator import (
        clear_render_target,
        is_render_target_initialized,
        setup_light,
    )
    from src.spheretrace.geometry.displaced_sphere import reset_sphere

    def _reset_all():
        reset_sphere()
        setup_light()
        setup_camera(PinholeCamera())
        if is_render_target_initialized():
            clear_render_target()

    _reset_all()

    yield

    _reset_all()
