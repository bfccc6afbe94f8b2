"""
Unit Tests - Result Generation, Manifest and Provider
"""
import pytest

from olap_dashboard.config.settings import EmptyFilterPolicy, ProviderSettings
from olap_dashboard.data.generators import ResultGenerator, build_manifest
from olap_dashboard.data import provider as provider_module
from olap_dashboard.data.provider import MockDataProvider, apply_request_filters
from olap_dashboard.dimensions.catalog import Domain
from olap_dashboard.quality.manifest import ColumnKind, ColumnManifest, ManifestViolation
from olap_dashboard.query.models import DataRequest


class TestColumnManifest:
    """Tests for ColumnManifest"""

    def test_duplicate_column_keeps_first_position(self):
        manifest = ColumnManifest()
        manifest.add("State", ColumnKind.TEXT).add("City", ColumnKind.TEXT).add("State", ColumnKind.TEXT)

        assert manifest.names == ["State", "City"]

    def test_valid_rows(self):
        """Test conforming rows pass"""
        manifest = ColumnManifest().add("Year", ColumnKind.NUMERIC).add("revenue", ColumnKind.NUMERIC)

        assert manifest.validate_rows([{"Year": 2020, "revenue": 5}, {"Year": 2021, "revenue": 0.5}]) == 2

    def test_missing_column(self):
        """Test rows lacking a column fail"""
        manifest = ColumnManifest().add("Year", ColumnKind.NUMERIC).add("revenue", ColumnKind.NUMERIC)

        with pytest.raises(ManifestViolation) as exc_info:
            manifest.validate_rows([{"Year": 2020, "revenue": 1}, {"revenue": 1}])

        assert exc_info.value.row_index == 1

    def test_unexpected_column(self):
        manifest = ColumnManifest().add("revenue", ColumnKind.NUMERIC)

        with pytest.raises(ManifestViolation):
            manifest.validate_row(0, {"revenue": 1, "Size": "S"})

    def test_wrong_kind(self):
        """Test numeric columns reject strings and booleans"""
        manifest = ColumnManifest().add("Year", ColumnKind.NUMERIC).add("Size", ColumnKind.TEXT)

        with pytest.raises(ManifestViolation):
            manifest.validate_row(0, {"Year": "2020", "Size": "S"})
        with pytest.raises(ManifestViolation):
            manifest.validate_row(0, {"Year": True, "Size": "S"})
        with pytest.raises(ManifestViolation):
            manifest.validate_row(0, {"Year": 2020, "Size": 3})


class TestBuildManifest:
    """Tests for the dimension rule table"""

    def test_aggregate_has_only_value_column(self):
        manifest = build_manifest(DataRequest(data_type=Domain.INVENTORY))
        assert manifest.items() == [("stock", ColumnKind.NUMERIC)]

    def test_dimension_order(self):
        """Test columns follow time, customer, item, geo order"""
        request = DataRequest(data_type=Domain.SALES, time=2, customer=1, item=3, geo=2)

        assert build_manifest(request).names == [
            "Quarter", "CustomerType", "ProductCode", "State", "City", "revenue",
        ]

    def test_customer_columns_follow_domain(self):
        assert build_manifest(DataRequest(data_type=Domain.SALES, customer=2)).names == ["CityKey", "revenue"]
        assert build_manifest(DataRequest(data_type=Domain.INVENTORY, customer=1)).names == ["StoreCode", "stock"]

    def test_multi_column_item(self):
        """Test item id 4 yields both size and weight range"""
        manifest = build_manifest(DataRequest(data_type=Domain.SALES, item=4))
        assert manifest.names == ["Size", "WeightRange", "revenue"]

    def test_unknown_level_id(self):
        with pytest.raises(ValueError):
            build_manifest(DataRequest(data_type=Domain.INVENTORY, customer=3))

    def test_year_is_numeric(self):
        manifest = build_manifest(DataRequest(data_type=Domain.SALES, time=1))
        assert manifest.items()[0] == ("Year", ColumnKind.NUMERIC)


class TestResultGenerator:
    """Tests for ResultGenerator"""

    @pytest.mark.parametrize(
        "n_columns, expected",
        [(0, 5), (1, 5), (2, 6), (4, 12), (6, 18), (7, 20), (10, 20)],
    )
    def test_row_count_clamped(self, provider_settings, n_columns, expected):
        """Test row count is three per column within 5..20"""
        assert ResultGenerator(provider_settings).row_count(n_columns) == expected

    def test_cell_rules(self, provider_settings):
        """Test deterministic cells follow the row index"""
        request = DataRequest(data_type=Domain.INVENTORY, time=3, customer=1, item=2, geo=2)
        _, rows = ResultGenerator(provider_settings).generate(request)

        assert len(rows) == 15
        assert rows[0] == {
            "Month": "Month 1",
            "StoreCode": "Store 10",
            "WeightRange": "5-10kg",
            "State": "State A",
            "City": "City 1",
            "stock": rows[0]["stock"],
        }
        assert rows[13]["Month"] == "Month 2"
        assert rows[14]["WeightRange"] == "15-20kg"
        assert rows[11]["State"] == "State B"

    def test_value_multiplier(self, provider_settings):
        """Test values are non-negative multiples of 1 + i mod 10"""
        request = DataRequest(data_type=Domain.SALES, time=1, customer=3, item=4, geo=2)
        _, rows = ResultGenerator(provider_settings).generate(request)

        assert len(rows) == 18
        for i, row in enumerate(rows):
            assert isinstance(row["revenue"], int)
            assert row["revenue"] >= 0
            assert row["revenue"] % (1 + i % 10) == 0

    def test_seed_reproducible(self):
        """Test a fixed seed gives identical values"""
        request = DataRequest(data_type=Domain.SALES, time=1)
        generator = ResultGenerator(ProviderSettings(latency_seconds=0, random_seed=7))

        assert generator.generate(request)[1] == generator.generate(request)[1]

    def test_custom_bounds(self):
        generator = ResultGenerator(ProviderSettings(rows_per_column=1, min_rows=2, max_rows=3))
        assert generator.row_count(0) == 2
        assert generator.row_count(5) == 3

    def test_invalid_bounds(self):
        with pytest.raises(ValueError):
            ProviderSettings(min_rows=10, max_rows=5)


class TestApplyRequestFilters:
    """Tests for request-time filtering"""

    def test_conjunctive_match(self, sample_rows):
        rows = apply_request_filters(sample_rows, {"Year": 2021, "Size": "S"})
        assert rows == [{"Year": 2021, "Size": "S", "revenue": 75}]

    def test_strict_equality(self, sample_rows):
        """Test a string never matches a numeric cell"""
        rows = apply_request_filters(sample_rows, {"Year": "2021"}, EmptyFilterPolicy.RETURN_EMPTY)
        assert rows == []

    def test_fallback_to_unfiltered(self, sample_rows):
        """Test unmatched filters return every row under the default policy"""
        assert apply_request_filters(sample_rows, {"Size": "XXL"}) == sample_rows

    def test_unknown_column_falls_back(self, sample_rows):
        assert apply_request_filters(sample_rows, {"Color": "red"}) == sample_rows

    def test_no_filters(self, sample_rows):
        assert apply_request_filters(sample_rows, {}) == sample_rows


class TestMockDataProvider:
    """Tests for MockDataProvider"""

    @pytest.mark.asyncio
    async def test_aggregate_request_has_only_value_column(self, provider):
        """Test all-aggregate request yields only the value column"""
        response = await provider.fetch(DataRequest(data_type=Domain.SALES))

        assert response.success
        assert response.columns == ["revenue"]
        assert len(response.data) == 5
        assert all(list(row) == ["revenue"] for row in response.data)

    @pytest.mark.asyncio
    async def test_year_request(self, provider):
        """Test sales by year end to end"""
        response = await provider.fetch(
            DataRequest.model_validate({"dataType": "sales", "time": 1, "customer": 0, "item": 0, "geo": 0})
        )

        assert response.success
        assert response.columns == ["Year", "revenue"]
        assert 5 <= len(response.data) <= 20
        for row in response.data:
            assert row["Year"] in {2020, 2021, 2022, 2023, 2024}
            assert isinstance(row["revenue"], int) and row["revenue"] >= 0

    @pytest.mark.asyncio
    async def test_multi_column_item(self, provider):
        """Test item id 4 produces size and weight range together"""
        response = await provider.fetch(DataRequest(data_type=Domain.INVENTORY, item=4))

        assert response.success
        for row in response.data:
            assert "Size" in row and "WeightRange" in row

    @pytest.mark.asyncio
    async def test_request_filters_applied(self, provider):
        """Test matching request filters narrow the result"""
        request = DataRequest(data_type=Domain.SALES, time=2, filters={"Quarter": "Q3"})
        response = await provider.fetch(request)

        assert response.success
        assert len(response.data) == 1
        assert {row["Quarter"] for row in response.data} == {"Q3"}

    @pytest.mark.asyncio
    async def test_fallback_equals_unfiltered_generation(self, provider):
        """Test filters excluding every row return the unfiltered generation"""
        unfiltered = await provider.fetch(DataRequest(data_type=Domain.SALES, time=1))
        filtered = await provider.fetch(DataRequest(data_type=Domain.SALES, time=1, filters={"Year": "2021"}))

        assert filtered.success
        assert filtered.data == unfiltered.data

    @pytest.mark.asyncio
    async def test_return_empty_policy(self, strict_provider):
        """Test the strict policy returns no rows but keeps the columns"""
        response = await strict_provider.fetch(
            DataRequest(data_type=Domain.SALES, time=1, filters={"Year": "2021"})
        )

        assert response.success
        assert response.data == []
        assert response.columns == ["Year", "revenue"]

    @pytest.mark.asyncio
    async def test_generation_error_becomes_failure(self, provider):
        """Test exceptions surface as a failed response"""
        response = await provider.fetch(DataRequest(data_type=Domain.INVENTORY, customer=2))

        assert response.success is False
        assert response.data == []
        assert "No generation rule" in response.message

    @pytest.mark.asyncio
    async def test_latency(self, monkeypatch):
        """Test the simulated latency is awaited"""
        delays = []

        async def fake_sleep(seconds):
            delays.append(seconds)

        monkeypatch.setattr(provider_module.asyncio, "sleep", fake_sleep)
        provider = MockDataProvider(ProviderSettings(latency_seconds=0.8))

        await provider.fetch(DataRequest(data_type=Domain.SALES))

        assert delays == [0.8]
