from __future__ import annotations

from pathlib import Path

import pytest

# Load dotenv files early so settings fixtures can read HYPERVEL_SUPPORT_* values
try:  # pragma: no cover
    from dotenv import load_dotenv

    TEST_ROOT = Path(__file__).resolve().parent
    # Load test/.env first, then fallback to test/.env.example for defaults
    load_dotenv(TEST_ROOT / ".env", override=False)
    load_dotenv(TEST_ROOT / ".env.example", override=False)
except ImportError:
    pass

from hypervel_support.collection import Collection
from hypervel_support.container import ApplicationContext, Container
from hypervel_support.context import Context
from hypervel_support.core.config import SupportSettings
from hypervel_support.data_object import DataObject
from hypervel_support.facades import Facade
from hypervel_support.lazy_collection import LazyCollection
from hypervel_support.strings import Str, Stringable
from hypervel_support.uri import Uri

_MACROABLE = (Collection, LazyCollection, Str, Stringable, Uri)


@pytest.fixture(scope="session")
def test_config() -> SupportSettings:
    """Fixture providing the support settings as loaded from the environment.

    Returns:
        SupportSettings: Settings with all HYPERVEL_SUPPORT_* variables applied
    """
    return SupportSettings()


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Reset every process-wide registry the support package keeps."""
    ApplicationContext.clear()
    Facade.clear_resolved_instances()
    Context.clear()
    DataObject.clear_caches()
    Str.flush_cache()
    Uri.set_url_generator_resolver(None)
    for klass in _MACROABLE:
        klass.flush_macros()

    yield

    ApplicationContext.clear()
    Facade.clear_resolved_instances()
    Context.clear()


@pytest.fixture
def container() -> Container:
    """A fresh container registered as the application container."""
    return ApplicationContext.set_container(Container())
