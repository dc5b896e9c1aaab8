"""
Console product manager.

A standalone, menu-driven CRUD program over a plain in-process list. It does
not use the repository layers; products are addressed by their 1-based
position in the list.
"""

from __future__ import annotations

import logging
import sys
from typing import List, Optional, TextIO

logger = logging.getLogger(__name__)

MENU = """ ECOMMERCE PRODUCT MANAGER
      1. Add Product
      2. View All Products
      3. View Product by Index
      4. Edit Product
      5. Delete Product
      6. Exit
      _______________________________________
      Enter your choice:
"""


class ConsoleProduct:
    def __init__(self, name: str, description: str, price: float):
        self._name = name
        self._description = description
        self._price = price

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        if not value:
            raise ValueError("Name cannot be empty")
        self._name = value

    @property
    def description(self) -> str:
        return self._description

    @description.setter
    def description(self, value: str) -> None:
        if not value:
            raise ValueError("Description cannot be empty")
        self._description = value

    @property
    def price(self) -> float:
        return self._price

    @price.setter
    def price(self, value: float) -> None:
        if value < 0:
            raise ValueError("Price cannot be negative")
        self._price = value

    def __str__(self) -> str:
        return f"Name: {self._name}\nDescription: {self._description}\nPrice: {self._price:.2f}"


class ProductManager:
    def __init__(self, output: Optional[TextIO] = None):
        self._products: List[ConsoleProduct] = []
        self._out = output or sys.stdout

    def _print(self, message: str = "") -> None:
        print(message, file=self._out)

    def __len__(self) -> int:
        return len(self._products)

    @property
    def products(self) -> List[ConsoleProduct]:
        return list(self._products)

    def _valid_index(self, index: int) -> bool:
        if 0 <= index < len(self._products):
            return True
        self._print("Invalid product index.\n")
        return False

    def add_product(self, product: ConsoleProduct) -> None:
        self._products.append(product)
        logger.debug("Console product added: %s", product.name)
        self._print("Product added succesfully.\n")

    def view_all_products(self) -> None:
        if not self._products:
            self._print("No products available.\n")
            return
        self._print("\nAll Products:")
        for number, product in enumerate(self._products, start=1):
            self._print(f"Products #{number}:")
            self._print(str(product))

    def view_product(self, index: int) -> None:
        if self._valid_index(index):
            self._print(str(self._products[index]))

    def edit_product(
        self,
        index: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
        price: Optional[float] = None,
    ) -> None:
        if not self._valid_index(index):
            return
        product = self._products[index]
        try:
            if name is not None:
                product.name = name
            if description is not None:
                product.description = description
            if price is not None:
                product.price = price
            self._print("Product updated successfully.\n")
        except ValueError as e:
            self._print(f"Error: {e}\n")

    def delete_product(self, index: int) -> None:
        if not self._valid_index(index):
            return
        del self._products[index]
        self._print("Product deleted successfully.\n")


def _parse_float(text: str) -> Optional[float]:
    try:
        return float(text)
    except ValueError:
        return None


def _parse_int(text: str) -> Optional[int]:
    try:
        return int(text)
    except ValueError:
        return None


class _Prompter:
    def __init__(self, stream: TextIO, output: TextIO):
        self._stream = stream
        self._out = output

    def ask(self, prompt: Optional[str] = None) -> str:
        if prompt is not None:
            print(prompt, file=self._out)
        line = self._stream.readline()
        if line == "":
            raise EOFError
        return line.rstrip("\r\n")


def _add(manager: ProductManager, prompter: _Prompter, out: TextIO) -> None:
    name = prompter.ask("Enter Product name")
    if not name:
        print("Name can not be empty.\n", file=out)
        return
    description = prompter.ask("Enter Product description")
    if not description:
        print(" description can not be empty.\n", file=out)
        return
    price = _parse_float(prompter.ask("Enter Product price"))
    if price is None or price < 0:
        print("Invalid price. Please enter a positive number.\n", file=out)
        return
    manager.add_product(ConsoleProduct(name, description, price))


def _ask_index(manager: ProductManager, prompter: _Prompter, prompt: str) -> Optional[int]:
    index = _parse_int(prompter.ask(prompt))
    if index is None or index <= 0 or index > len(manager):
        return None
    return index - 1


def _edit(manager: ProductManager, prompter: _Prompter, out: TextIO) -> None:
    index = _ask_index(manager, prompter, "Enter product index to edit:")
    if index is None:
        print("Invalid index.\n", file=out)
        return

    name = prompter.ask("Enter new Product name (leave empty to keep current):")
    description = prompter.ask("Enter new Product description (leave empty to keep current):")
    price_input = prompter.ask("Enter new Product price (leave empty to keep current):")

    price: Optional[float] = None
    if price_input:
        price = _parse_float(price_input)
        if price is None:
            print("Invalid price. Please enter a number.\n", file=out)
            return
        if price < 0:
            print("Price cannot be negative.\n", file=out)
            return

    manager.edit_product(index, name=name or None, description=description or None, price=price)


def run_menu(
    stream: Optional[TextIO] = None,
    output: Optional[TextIO] = None,
    manager: Optional[ProductManager] = None,
) -> ProductManager:
    """Run the interactive menu until the user exits or input ends."""
    stream = stream or sys.stdin
    output = output or sys.stdout
    manager = manager or ProductManager(output)
    prompter = _Prompter(stream, output)

    while True:
        try:
            choice = prompter.ask(MENU).strip()
            if choice == "1":
                _add(manager, prompter, output)
            elif choice == "2":
                manager.view_all_products()
            elif choice == "3":
                index = _parse_int(prompter.ask("Enter product index:"))
                if index is None or index <= 0:
                    print("Invalid index. Please enter a positive number.\n", file=output)
                    continue
                manager.view_product(index - 1)
            elif choice == "4":
                _edit(manager, prompter, output)
            elif choice == "5":
                index = _ask_index(manager, prompter, "Enter the product index to delete:")
                if index is None:
                    print("Invalid index.\n", file=output)
                    continue
                manager.delete_product(index)
            elif choice == "6":
                print("Exiting...", file=output)
                return manager
            else:
                print("Invalid choice. Please try again.\n", file=output)
        except EOFError:
            logger.debug("Input closed, leaving product manager")
            return manager
