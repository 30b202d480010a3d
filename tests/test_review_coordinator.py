import pytest

from catalog_client.contracts import Forbidden, ValidationError
from catalog_client.demo import DemoDataset
from catalog_client.reviews import validate_review_input
from catalog_client.service import build_catalog_service


def test_validation_normalizes_input():
    draft = validate_review_input(4, "   Works well for the price   ", "  ", " dev-a ")

    assert draft.rating == 4
    assert draft.comment == "Works well for the price"
    assert draft.reviewer_name is None
    assert draft.device_id == "dev-a"

    assert validate_review_input(5, "   ", None, "dev-a").comment is None


@pytest.mark.parametrize(
    "rating, comment, device_id, field",
    [
        (0, None, "dev-a", "rating"),
        (6, None, "dev-a", "rating"),
        (4.5, None, "dev-a", "rating"),
        (True, None, "dev-a", "rating"),
        (4, "too short", "dev-a", "comment"),
        (4, "x" * 2001, "dev-a", "comment"),
        (4, None, "   ", "device_id"),
    ],
)
def test_validation_rejects_bad_input(rating, comment, device_id, field):
    with pytest.raises(ValidationError) as excinfo:
        validate_review_input(rating, comment, None, device_id)

    assert field in excinfo.value.field_errors


def test_validation_accepts_boundary_lengths():
    assert validate_review_input(1, "x" * 10, None, "dev-a").comment == "x" * 10
    assert validate_review_input(5, "x" * 2000, None, "dev-a").comment == "x" * 2000


@pytest.mark.asyncio
async def test_short_comment_is_rejected_before_any_request(live_service, live_transport, backend_dataset):
    with pytest.raises(ValidationError):
        await live_service.create_review(1, 5, "Nice!", device_id="dev-a")

    assert live_transport.requests == []
    assert backend_dataset.get_product(1).product.review_count == 4


@pytest.mark.asyncio
async def test_create_review_uses_persisted_device_id(live_service, backend_dataset):
    review = await live_service.create_review(3, 5, "Comfortable from day one", "Sam")

    assert review.device_id == live_service.device_id()
    assert backend_dataset.get_product(3).product.review_count == 4


@pytest.mark.asyncio
async def test_update_by_non_owner_is_forbidden_in_demo_mode(settings, store, offline_transport):
    demo = DemoDataset(
        products=[{"id": 1, "name": "Lamp", "category": "Home & Kitchen", "price": 20}],
        reviews={1: [{"id": 5, "rating": 4, "device_id": "A", "comment": "Warm light, sturdy base"}]},
    )
    service = build_catalog_service(settings, store=store, demo=demo, transport=offline_transport)

    with pytest.raises(Forbidden):
        await service.update_review(5, 1, "Changed by another device", device_id="B")

    review = demo.reviews_for(1)[0]
    assert review.rating == 4
    assert review.comment == "Warm light, sturdy base"

    updated = await service.update_review(5, 5, "Even better after a week", device_id="A")
    assert updated.rating == 5


@pytest.mark.asyncio
async def test_toggle_helpful_reloads_most_helpful_first(live_service, live_transport):
    page = await live_service.toggle_helpful(104, 1, device_id="dev-a")

    assert live_transport.paths == ["/api/reviews/104/helpful", "/api/reviews/product/1"]
    reload_params = live_transport.requests[-1].url.params
    assert reload_params["sortBy"] == "helpfulCount"
    assert reload_params["sortDir"] == "DESC"
    assert reload_params["page"] == "0"
    assert page.content[0].id == 104
    assert page.content[0].helpful_count == 1

    page = await live_service.toggle_helpful(104, 1, device_id="dev-a")
    assert all(r.helpful_count == 0 for r in page.content)


@pytest.mark.asyncio
async def test_toggle_helpful_offline_uses_demo_votes(offline_service, demo):
    page = await offline_service.toggle_helpful(202, 2, device_id="dev-a")

    assert page.content[0].id == 202
    assert page.content[0].helpful_count == 1
    assert demo.list_reviews(2).total_elements == 3
