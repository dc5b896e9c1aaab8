import json

from catalog.data.models import ProductModel


def test_from_json_reads_camel_case_payload():
    model = ProductModel.from_json(
        '{"id": "7", "name": "Clogs", "description": "Wooden clogs", "imageUrl": "assets/clogs.jpg", "price": 40}'
    )

    assert model.image_url == "assets/clogs.jpg"
    assert model.price == 40.0


def test_to_json_writes_camel_case_keys():
    model = ProductModel(id="7", name="Clogs", description="Wooden clogs", image_url="assets/clogs.jpg", price=40.0)

    body = json.loads(model.to_json())

    assert "imageUrl" in body
    assert "image_url" not in body


def test_from_map_tolerates_nulls_and_numeric_ids():
    model = ProductModel.from_map({"id": 12, "name": None, "price": None})

    assert model.id == "12"
    assert model.name == ""
    assert model.price == 0.0


def test_entity_conversion_keeps_every_field(sample_product):
    model = ProductModel.from_entity(sample_product)

    assert model.to_entity() == sample_product
    assert model.to_map()["imageUrl"] == sample_product.image_url


def test_create_assigns_an_id():
    model = ProductModel.create("Slippers", "House slippers", "assets/slippers.jpg", 15.0)

    assert model.id
    assert model.to_entity().is_valid()
