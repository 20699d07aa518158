import pytest

from qap_core.amenities import AmenityCategory
from qap_core.locations import resolve_location
from tests.helpers import make_amenity


@pytest.fixture
def one_of_each_far():
    return [make_amenity(c.value, 5.0 + i) for i, c in enumerate(AmenityCategory)]


@pytest.fixture
def austin():
    return resolve_location("Texas", "Austin", "78701", "100 Congress Ave")


@pytest.fixture
def clean_env(monkeypatch):
    for name in [
        "QAP_AMENITY_SEED", "QAP_LOOKUP_DELAY_S", "QAP_VOLUME_THRESHOLD",
        "QAP_PROXIMITY_THRESHOLD_KM", "QAP_LOG_LEVEL", "QAP_REPORT_DIR",
    ]:
        # set first so the undo also removes values loaded from .env files
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch
