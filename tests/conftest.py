# Shared fixtures. Qt runs on the offscreen platform so widget tests work
# without a display; pytest-qt provides the ``qtbot`` fixture.

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from salesreport.services.service_locator import services


@pytest.fixture(autouse=True)
def _isolate_services():
    """Each test starts with an empty service registry."""
    services.clear()
    yield
    coordinator = services.try_get("fetch_coordinator")
    if coordinator is not None:
        coordinator.detach()
    logging_service = services.try_get("logging_service")
    if logging_service is not None:
        logging_service.detach_root()
    services.clear()


@pytest.fixture
def sample_rows():
    return [
        {
            "salesRepName": "Ada",
            "totalLeads": 10,
            "totalOpps": 4,
            "conversionRate": 0.4,
            "latestCreatedDate": "2020-03-20",
            "totalValue": 1500.0,
        },
        {
            "salesRepName": "Bob",
            "totalLeads": 25,
            "totalOpps": 5,
            "conversionRate": 0.2,
            "latestCreatedDate": "2020-03-05",
            "totalValue": 9000.0,
        },
        {
            "salesRepName": "Cy",
            "totalLeads": 7,
            "totalOpps": 4,
            "conversionRate": 0.5714,
            "latestCreatedDate": "2020-03-28",
            "totalValue": 300.25,
        },
    ]
