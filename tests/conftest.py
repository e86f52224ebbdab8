"""Pytest configuration for path tracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, default_fp=ti.f32, fast_math=False)
    yield


@pytest.fixture(autouse=True)
def clear_scene_data():
    """Clear the uploaded scene before and after each test."""
    # Import here so the scene fields are created after ti.init()
    from src.pathtracer.scene.intersection import clear_scene

    clear_scene()
    yield
    clear_scene()


@pytest.fixture
def default_viewport():
    """Upload the default pinhole viewport."""
    from src.pathtracer.camera.pinhole import Viewport, setup_viewport

    viewport = Viewport()
    setup_viewport(viewport)
    return viewport
