import asyncio
import io
import os
import re

import pytest
from fastapi import HTTPException, UploadFile

from pizzeria.core.config import settings
from pizzeria.utils.forms import normalize_form_fields
from pizzeria.utils.uploads import (
    generate_upload_filename,
    remove_image,
    save_image,
    validate_and_read_image,
)
from tests.conftest import PNG_BYTES


def _upload(name, content=PNG_BYTES):
    return UploadFile(file=io.BytesIO(content), filename=name)


def test_filename_format():
    name = generate_upload_filename("image", "My Pizza.JPG")
    assert re.fullmatch(r"image-\d{13}-\d{9}\.jpg", name)


def test_save_image_writes_file_and_returns_url(upload_dir):
    url = asyncio.run(save_image(_upload("pizza.png")))

    assert url.startswith("/uploads/image-")
    path = os.path.join(upload_dir, url.rsplit("/", 1)[-1])
    with open(path, "rb") as f:
        assert f.read() == PNG_BYTES


def test_upload_dir_created_on_first_use(tmp_path):
    target = tmp_path / "fresh" / "uploads"
    url = asyncio.run(save_image(_upload("pizza.gif"), upload_dir=str(target)))
    assert (target / url.rsplit("/", 1)[-1]).exists()


@pytest.mark.parametrize("name", ["script.exe", "notes.txt", "noext", "image.webp"])
def test_disallowed_extensions(name):
    with pytest.raises(HTTPException) as exc:
        asyncio.run(validate_and_read_image(_upload(name)))
    assert exc.value.status_code == 400


def test_oversized_file_rejected():
    with pytest.raises(HTTPException) as exc:
        asyncio.run(validate_and_read_image(_upload("big.png", b"x" * 11), max_bytes=10))
    assert exc.value.status_code == 400
    assert asyncio.run(validate_and_read_image(_upload("ok.png", b"x" * 10), max_bytes=10)) == b"x" * 10


def test_oversized_upload_over_http_is_400(client, monkeypatch):
    monkeypatch.setattr(settings, "max_upload_bytes", 16)

    response = client.post(
        "/api/menu-items",
        data={"name": "Big", "price": "10", "category": "Classics"},
        files={"image": ("big.png", b"x" * 32, "image/png")},
    )

    assert response.status_code == 400
    assert client.get("/api/menu-items").json() == []


def test_wrong_type_over_http_is_400(client, upload_dir):
    response = client.post(
        "/api/menu-items",
        data={"name": "Doc", "price": "10", "category": "Classics"},
        files={"image": ("menu.pdf", b"%PDF", "application/pdf")},
    )

    assert response.status_code == 400
    assert os.listdir(upload_dir) == []


def test_remove_image_rules(upload_dir):
    for name in ("image-1.png", "placeholder-pizza.png"):
        with open(os.path.join(upload_dir, name), "wb") as f:
            f.write(PNG_BYTES)

    assert remove_image("/uploads/placeholder-pizza.png") is False
    assert remove_image("https://cdn.example.com/image-1.png") is False
    assert remove_image(None) is False
    assert remove_image("/uploads/missing.png") is False
    assert remove_image("/uploads/image-1.png") is True
    assert sorted(os.listdir(upload_dir)) == ["placeholder-pizza.png"]


def test_normalize_form_fields():
    fields = [
        ("name", "Diavola"),
        ("availableSizes", '["Small", "Large"]'),
        ("availableToppings", "Olives, Onions"),
        ("discount", ""),
        ("image", "null"),
        ("description", "undefined"),
    ]

    data = normalize_form_fields(fields, array_fields=("availableSizes", "availableToppings"))

    assert data == {
        "name": "Diavola",
        "availableSizes": ["Small", "Large"],
        "availableToppings": ["Olives", "Onions"],
        "image": None,
    }
