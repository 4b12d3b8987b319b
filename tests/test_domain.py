import pytest

from marketplace.domain.entities.chat import Chat
from marketplace.domain.entities.message import normalize_content
from marketplace.domain.entities.product import Product
from marketplace.domain.entities.user import User
from marketplace.domain.exceptions import DomainValidationError
from marketplace.domain.services.chat_roles import (
    ChatRole,
    canonical_room_id,
    classify_role,
    room_id_for,
)
from marketplace.domain.services.passwords import hash_password, verify_password
from marketplace.domain.value_objects.product_id import ProductId
from marketplace.domain.value_objects.user_email import UserEmail
from marketplace.domain.value_objects.user_id import UserId

RAW_ID = "0F8FAD5B-D9CB-469F-A165-70867728950E"
CANONICAL_ID = "0f8fad5b-d9cb-469f-a165-70867728950e"


def test_ids_are_canonicalised():
    assert UserId(RAW_ID).value == CANONICAL_ID
    assert UserId(RAW_ID) == UserId(CANONICAL_ID)
    assert ProductId("{" + RAW_ID + "}").value == CANONICAL_ID


@pytest.mark.parametrize("bad", ["", "not-a-uuid", "1234"])
def test_malformed_ids_are_rejected(bad):
    with pytest.raises(ValueError):
        UserId(bad)


def test_email_is_trimmed_and_lowercased():
    assert UserEmail("  Alice@Example.COM ").value == "alice@example.com"
    with pytest.raises(ValueError):
        UserEmail("alice@example")


@pytest.mark.parametrize("content", ["", "   ", "\n\t", None, 42])
def test_empty_content_is_rejected(content):
    with pytest.raises(DomainValidationError):
        normalize_content(content)


def test_content_is_trimmed():
    assert normalize_content("  hi there \n") == "hi there"


def test_role_classification_compares_canonical_ids():
    owner = User.create("Seller", UserEmail("s@example.com"), "x")
    product = Product.create(
        owner_id=UserId(owner.id.value.upper()),
        title="Lamp",
        category="furniture",
        location="Busan",
        price=10,
        description="Warm desk lamp, works fine",
    )

    assert classify_role(product, UserId(owner.id.value)) is ChatRole.SELLER
    assert classify_role(product, UserId(CANONICAL_ID)) is ChatRole.BUYER


def test_room_id_depends_only_on_product_and_buyer():
    product_id = ProductId(RAW_ID)
    buyer_id = UserId("9b2e0a4e-3c7c-4b8e-9f51-2d6a3d2b1c10")

    room = room_id_for(product_id, buyer_id)

    assert room == f"product-{CANONICAL_ID}-buyer-9b2e0a4e-3c7c-4b8e-9f51-2d6a3d2b1c10"
    assert canonical_room_id(f"product-{RAW_ID}-buyer-9B2E0A4E-3C7C-4B8E-9F51-2D6A3D2B1C10") == room
    assert canonical_room_id("lobby") == "lobby"


def test_product_create_collects_all_errors():
    with pytest.raises(DomainValidationError) as exc:
        Product.create(
            owner_id=UserId(CANONICAL_ID),
            title="x",
            category="cars",
            location=" ",
            price=-1,
            description="short",
        )

    message = exc.value.message
    assert "Title" in message
    assert "category" in message
    assert "Location" in message
    assert "Price" in message
    assert "Description" in message


def test_user_name_must_be_long_enough():
    with pytest.raises(DomainValidationError):
        User.create(" a ", UserEmail("a@example.com"), "x")


def test_chat_append_keeps_order_and_bumps_updated_at():
    chat = Chat.create(
        ProductId(CANONICAL_ID),
        UserId(CANONICAL_ID),
        UserId("9b2e0a4e-3c7c-4b8e-9f51-2d6a3d2b1c10"),
    )
    created = chat.updated_at

    first = chat.append(chat.buyer_id, " hello ")
    second = chat.append(chat.seller_id, "hi")

    assert [m.content for m in chat.messages] == ["hello", "hi"]
    assert chat.last_message is second
    assert chat.updated_at == second.created_at >= created
    assert first.chat_id == chat.id


def test_password_hash_round_trip():
    stored = hash_password("secret123")

    assert stored.startswith("scrypt$")
    assert verify_password("secret123", stored)
    assert not verify_password("secret124", stored)
    assert not verify_password("secret123", "garbage")
    assert hash_password("secret123") != stored
