import pytest

from catalog_client.contracts import FilterState, Mode, ValidationError
from catalog_client.service import build_catalog_service
from catalog_client.storage.preferences import BASE_URL_KEY

from conftest import BASE_URL


@pytest.mark.asyncio
async def test_test_connection_does_not_touch_mode(live_service, offline_service, store):
    assert await live_service.test_connection() is True
    assert await offline_service.test_connection("http://10.0.2.2:8080") is False
    assert offline_service.current_mode == Mode.LIVE


def test_set_base_url_is_used_by_next_calls(live_service):
    live_service.set_base_url("http://192.168.1.20:8080/")

    assert live_service.preferences.get_base_url() == "http://192.168.1.20:8080"
    assert live_service.gateway.live.base_url == "http://192.168.1.20:8080"


def test_device_id_is_stable(live_service):
    assert live_service.device_id() == live_service.device_id()


@pytest.mark.asyncio
async def test_product_list_controller_pages_through_catalog(live_service):
    controller = live_service.product_list_controller(FilterState(sort_by="price"))

    await controller.mount()
    await controller.load_more()
    await controller.load_more()

    assert len(controller.items) == 12
    assert controller.has_more is False
    prices = [p.price for p in controller.items]
    assert prices == sorted(prices)


@pytest.mark.asyncio
async def test_review_list_controller_is_bound_to_product(offline_service):
    controller = offline_service.review_list_controller(1)

    await controller.mount()

    assert [r.id for r in controller.items] == [101, 102, 103]
    assert controller.has_more is True

    controller.update_filters(min_rating=5)
    await controller.wait_idle()

    assert [r.id for r in controller.items] == [101, 103]
    assert controller.has_more is False


@pytest.mark.asyncio
async def test_delete_invalidates_summary(live_service):
    device_id = live_service.device_id()
    review = await live_service.create_review(1, 2, "Fan noise is louder than expected", device_id=device_id)
    entry = await live_service.get_summary(1, "en")
    assert entry.review_count_at_fetch == 5

    await live_service.delete_review(review.id, product_id=1, device_id=device_id)

    assert live_service.summaries.peek(1, "en") is None
    assert (await live_service.get_summary(1, "en")).review_count_at_fetch == 4


@pytest.mark.asyncio
async def test_unusable_stored_base_url_falls_back_to_demo(settings, store, demo):
    service = build_catalog_service(settings, store=store, demo=demo)
    store.set(BASE_URL_KEY, "http://localhost:99999")

    page = await service.list_products(FilterState(), 0)

    assert [p.id for p in page.content] == [1, 2, 3, 4, 5]
    assert service.current_mode == Mode.DEMO
    assert await service.test_connection() is False


def test_set_base_url_rejects_out_of_range_port(live_service):
    with pytest.raises(ValidationError):
        live_service.set_base_url("http://localhost:99999")

    assert live_service.preferences.get_base_url() == BASE_URL


@pytest.mark.asyncio
async def test_cached_summary_issues_no_requests(live_service, live_transport):
    first = await live_service.get_summary(1, "en")
    seen = len(live_transport.requests)

    second = await live_service.get_summary(1, "en")

    assert second is first
    assert live_transport.paths[seen:] == []


@pytest.mark.asyncio
async def test_summary_uses_known_review_count(live_service, live_transport):
    await live_service.list_products(FilterState(), 0)
    await live_service.get_summary(1, "en")
    await live_service.get_summary(2, "en", review_count=3)

    assert "/api/products/1" not in live_transport.paths
    assert "/api/products/2" not in live_transport.paths
    assert live_transport.paths[-2:] == ["/api/products/1/review-summary", "/api/products/2/review-summary"]


@pytest.mark.asyncio
async def test_cached_summary_offline_does_not_wait_for_backend(offline_service, offline_transport):
    first = await offline_service.get_summary(1, "en")
    seen = len(offline_transport.requests)

    second = await offline_service.get_summary(1, "en")

    assert second is first
    assert offline_transport.paths[seen:] == []
    assert first.summary.review_count_used == 3
