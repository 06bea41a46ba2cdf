"""Pytest configuration and shared fixtures."""
import pytest

from recordform import MockRecordApi, RecordStore, FieldBinder
import recordform.config as config_module


@pytest.fixture(autouse=True)
def reset_form_config():
    """Make sure no test leaks its FormConfig into the next one."""
    config_module.clear_current_form_config()
    yield
    config_module.clear_current_form_config()


@pytest.fixture
def api():
    """Provide an in-process persistence collaborator."""
    return MockRecordApi()


@pytest.fixture
def store(api):
    """Provide a store holding the default record."""
    return RecordStore(api)


@pytest.fixture
def binder(store):
    """Provide a binder closed over the store."""
    return FieldBinder(store)
