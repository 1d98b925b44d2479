#!/usr/bin/env python3
"""
Price Tag Example: Context-driven labels

Builds one shelf tag per product. Perishable products get a "KEEP REFRIGERATED"
line, expensive ones a security note, and every tag gets a centered barcode.
"""

from dataclasses import dataclass

from labelgen import HorizontalAlignment, LabelBuilder, LabelSettings, save_label


@dataclass
class Product:
    name: str
    sku: str
    price: float
    perishable: bool = False


products = [
    Product("Whole Milk 1L", "MLK-0001", 1.49, perishable=True),
    Product("Basmati Rice 5kg", "RIC-0420", 24.90),
    Product("Olive Oil Extra Virgin 750ml", "OIL-0075", 9.80),
]

settings = LabelSettings(font_size=18)

for product in products:
    builder = (
        LabelBuilder(400, 240, settings=settings)
        .with_context(product)
        .add_split_text(product.name, 0, 10, None, 22, 20, 26, alignment=HorizontalAlignment.CENTER)
        .add_text(f"${product.price:.2f}", 0, 70, size=36, alignment=HorizontalAlignment.CENTER)
        .if_(lambda p: p.perishable, lambda b: b.add_text("KEEP REFRIGERATED", 0, 115, color="blue"), Product)
        .elif_(lambda p: p.price > 20, lambda b: b.add_text("Ask staff for assistance", 0, 115), Product)
        .add_barcode(product.sku, 0, 145, 300, 60, HorizontalAlignment.CENTER)
        .center_vertically()
    )

    output = f"{product.sku}.png"
    builder.generate(lambda img: img.save(output))
    save_label(builder.build(), f"{product.sku}.json")

    print(f"✓ Tag saved to: {output}")
