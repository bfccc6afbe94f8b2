"""
Test Suite Configuration
"""
import pytest

from olap_dashboard.config import Settings
from olap_dashboard.config.settings import EmptyFilterPolicy, ProviderSettings
from olap_dashboard.data.provider import MockDataProvider
from olap_dashboard.dimensions.catalog import Domain
from olap_dashboard.query.models import DataRequest


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Create test settings"""
    return Settings(
        app_env="testing",
        debug=True,
    )


@pytest.fixture
def provider_settings() -> ProviderSettings:
    """Provider settings without latency and with a fixed seed"""
    return ProviderSettings(latency_seconds=0, random_seed=42)


@pytest.fixture
def provider(provider_settings) -> MockDataProvider:
    """Mock provider using the test settings"""
    return MockDataProvider(provider_settings)


@pytest.fixture
def strict_provider() -> MockDataProvider:
    """Mock provider that returns no rows when request filters match nothing"""
    return MockDataProvider(
        ProviderSettings(
            latency_seconds=0,
            random_seed=42,
            empty_filter_policy=EmptyFilterPolicy.RETURN_EMPTY,
        )
    )


@pytest.fixture
def year_request() -> DataRequest:
    """Sales request broken down by year only"""
    return DataRequest(data_type=Domain.SALES, time=1)


@pytest.fixture
def sample_rows() -> list:
    """Result rows mixing numeric and text columns"""
    return [
        {"Year": 2020, "Size": "S", "revenue": 100},
        {"Year": 2021, "Size": "M", "revenue": 250},
        {"Year": 2021, "Size": "S", "revenue": 75},
        {"Year": 2022, "Size": "XL", "revenue": 980},
        {"Year": 2020, "Size": "M", "revenue": 40},
    ]
