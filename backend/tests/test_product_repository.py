"""Tests for the in-memory ProductRepository."""

import json
from concurrent.futures import ThreadPoolExecutor

import pytest

from catalog.core.exceptions import InvalidCodeError, ProductNotFoundError, StoreError
from catalog.models.product import Product
from catalog.repositories.product_repository import ProductRepository
from catalog.store.json_store import JsonStore

from .conftest import NEW_PRODUCT


@pytest.fixture
def repository(seed_products):
    return ProductRepository(seed_products)


def test_repository_copies_initial_list(seed_products):
    repository = ProductRepository(seed_products)
    repository.delete(1)
    assert len(seed_products) == 3


def test_get_by_id(repository):
    assert repository.get_by_id(3).code_value == "T65812L"
    with pytest.raises(ProductNotFoundError):
        repository.get_by_id(10)


def test_get_by_price_gt_is_strict(repository):
    assert [p.id for p in repository.get_by_price_gt(71.42)] == [2, 3]
    assert repository.get_by_price_gt(1000) == []


def test_create_assigns_next_id(repository):
    created = repository.create(Product(id=0, **NEW_PRODUCT))
    assert created.id == 4
    assert repository.get_all()[-1] == created


def test_create_rejects_duplicate_code(repository):
    with pytest.raises(InvalidCodeError):
        repository.create(Product(id=0, **{**NEW_PRODUCT, "code_value": "M4637HG"}))
    assert len(repository.get_all()) == 3


def test_create_after_delete_does_not_reuse_ids(repository):
    repository.delete(2)
    created = repository.create(Product(id=0, **NEW_PRODUCT))
    assert created.id == 4
    assert len({p.id for p in repository.get_all()}) == 3


def test_update_keeps_id_and_position(repository):
    replacement = Product(id=99, **NEW_PRODUCT)
    updated = repository.update(2, replacement)

    assert updated.id == 2
    assert [p.code_value for p in repository.get_all()] == ["S82254D", "NewCode123", "T65812L"]


def test_update_with_same_code_is_allowed(repository):
    product = repository.get_by_id(1).model_copy(update={"name": "Renamed"})
    assert repository.update(1, product).name == "Renamed"


def test_update_rejects_code_of_another_product(repository):
    product = repository.get_by_id(1).model_copy(update={"code_value": "T65812L"})
    with pytest.raises(InvalidCodeError):
        repository.update(1, product)
    assert repository.get_by_id(1).code_value == "S82254D"


def test_update_unknown_id(repository):
    with pytest.raises(ProductNotFoundError):
        repository.update(7, Product(id=7, **NEW_PRODUCT))


def test_delete_preserves_order(repository):
    repository.delete(2)
    assert [p.id for p in repository.get_all()] == [1, 3]
    with pytest.raises(ProductNotFoundError):
        repository.delete(2)


def test_concurrent_creates_get_distinct_ids(repository):
    def create(index):
        return repository.create(Product(id=0, **{**NEW_PRODUCT, "code_value": f"C{index}"}))

    with ThreadPoolExecutor(max_workers=8) as pool:
        created = list(pool.map(create, range(50)))

    assert len({p.id for p in created}) == 50
    assert len(repository.get_all()) == 53


def test_mutations_are_written_through_store(seed_products, products_file):
    store = JsonStore(products_file)
    repository = ProductRepository(seed_products, store=store)

    repository.create(Product(id=0, **NEW_PRODUCT))
    repository.delete(1)

    raw = json.loads(products_file.read_text(encoding="utf-8"))
    assert [item["id"] for item in raw] == [2, 3, 4]


def test_without_store_file_is_untouched(repository, products_file):
    before = products_file.read_text(encoding="utf-8")
    repository.create(Product(id=0, **NEW_PRODUCT))
    assert products_file.read_text(encoding="utf-8") == before


@pytest.mark.parametrize(
    "mutate",
    [
        lambda repo: repo.create(Product(id=0, **NEW_PRODUCT)),
        lambda repo: repo.update(1, Product(id=1, **NEW_PRODUCT)),
        lambda repo: repo.delete(1),
    ],
    ids=["create", "update", "delete"],
)
def test_failed_save_leaves_collection_unchanged(seed_products, tmp_path, mutate):
    store = JsonStore(tmp_path / "missing-dir" / "products.json")
    repository = ProductRepository(seed_products, store=store)

    with pytest.raises(StoreError):
        mutate(repository)

    assert repository.get_all() == seed_products
