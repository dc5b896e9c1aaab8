import io

import pytest

from catalog.console import ConsoleProduct, ProductManager, run_menu


def run(lines):
    output = io.StringIO()
    manager = run_menu(io.StringIO("\n".join(lines) + "\n"), output)
    return manager, output.getvalue()


def test_console_product_setters_validate():
    product = ConsoleProduct("Shoe", "Leather shoe", 10.0)

    with pytest.raises(ValueError, match="Name cannot be empty"):
        product.name = ""
    with pytest.raises(ValueError, match="Description cannot be empty"):
        product.description = ""
    with pytest.raises(ValueError, match="Price cannot be negative"):
        product.price = -1


def test_console_product_str_formats_price():
    assert str(ConsoleProduct("Shoe", "Leather shoe", 10)) == "Name: Shoe\nDescription: Leather shoe\nPrice: 10.00"


def test_manager_reports_empty_list_and_invalid_index():
    out = io.StringIO()
    manager = ProductManager(out)

    manager.view_all_products()
    manager.view_product(0)
    manager.delete_product(3)

    text = out.getvalue()
    assert "No products available." in text
    assert text.count("Invalid product index.") == 2


def test_manager_edit_keeps_product_on_validation_error():
    out = io.StringIO()
    manager = ProductManager(out)
    manager.add_product(ConsoleProduct("Shoe", "Leather shoe", 10.0))

    manager.edit_product(0, name="Boot", price=-5)

    assert "Error: Price cannot be negative" in out.getvalue()
    assert manager.products[0].name == "Boot"
    assert manager.products[0].price == 10.0


def test_menu_add_view_edit_delete_exit():
    manager, text = run([
        "1", "Shoe", "Leather shoe", "49.5",
        "1", "Sock", "Wool sock", "3",
        "2",
        "3", "2",
        "4", "1", "", "Suede shoe", "55",
        "5", "2",
        "6",
    ])

    assert len(manager) == 1
    assert manager.products[0].name == "Shoe"
    assert manager.products[0].description == "Suede shoe"
    assert manager.products[0].price == 55.0
    assert "Products #2:" in text
    assert "Name: Sock\nDescription: Wool sock\nPrice: 3.00" in text
    assert "Product updated successfully." in text
    assert "Product deleted successfully." in text
    assert text.rstrip().endswith("Exiting...")


def test_menu_rejects_bad_input():
    manager, text = run([
        "1", "",
        "1", "Shoe", "",
        "1", "Shoe", "Leather", "abc",
        "3", "0",
        "4", "1",
        "5", "x",
        "9",
        "6",
    ])

    assert len(manager) == 0
    assert "Name can not be empty." in text
    assert "description can not be empty." in text
    assert "Invalid price. Please enter a positive number." in text
    assert "Invalid index. Please enter a positive number." in text
    assert text.count("Invalid index.\n") == 2
    assert "Invalid choice. Please try again." in text


def test_menu_edit_rejects_negative_price():
    manager, text = run(["1", "Shoe", "Leather", "10", "4", "1", "", "", "-3", "6"])

    assert "Price cannot be negative." in text
    assert manager.products[0].price == 10.0


def test_menu_stops_at_end_of_input():
    manager, text = run(["1", "Shoe", "Leather", "10"])

    assert len(manager) == 1
    assert "Exiting..." not in text
