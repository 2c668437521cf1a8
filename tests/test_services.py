# tests/test_services.py
import pytest
from bazaars import crud, schemas, services


def _content(**overrides):
    data = {
        "title": "Bike",
        "description": "Used",
        "price": "120.50",
        "user_email": "a@b.com",
        "user_phone": "555-1234",
    }
    data.update(overrides)
    return schemas.AdCreate(**data)


def test_publish_stores_uploads_in_order(db, store):
    obj = services.publish_ad(db, store, _content(top_ad=True), [
        ("front.png", b"front", "image/png"),
        ("back.png", b"back", "image/png"),
    ])
    assert obj.top_ad is True
    assert obj.status == "active"
    assert [store.get(i).data for i in obj.images] == [b"front", b"back"]


def test_replace_keeps_appends_and_prunes(db, store):
    obj = services.publish_ad(db, store, _content(), [
        ("a.png", b"a", "image/png"),
        ("b.png", b"b", "image/png"),
    ])
    first, second = obj.images
    res = services.replace_ad(db, store, obj.id, _content(title="Road bike", price="99.99"),
                              keep_image_ids=[second], uploads=[("c.png", b"c", "image/png")])
    assert res.title == "Road bike"
    assert res.images[0] == second
    assert len(res.images) == 2
    assert store.get(res.images[1]).data == b"c"
    assert not store.exists(first)


def test_replace_rejects_foreign_images(db, store):
    obj = services.publish_ad(db, store, _content())
    other = store.save("x.png", b"x", "image/png")
    with pytest.raises(ValueError):
        services.replace_ad(db, store, obj.id, _content(), keep_image_ids=[other])
    assert store.exists(other)


def test_replace_missing_ad(db, store):
    assert services.replace_ad(db, store, 9999, _content()) is None


def test_remove_deletes_row_and_images(db, store):
    obj = services.publish_ad(db, store, _content(), [("a.png", b"a", "image/png")])
    image_id = obj.images[0]
    assert services.remove_ad(db, store, obj.id) is True
    assert crud.get_ad(db, obj.id) is None
    assert not store.exists(image_id)
    assert services.remove_ad(db, store, obj.id) is False


def test_negative_price_rejected_before_storage():
    with pytest.raises(ValueError):
        _content(price="-1")


def _stored_files(store):
    return sorted(p.name for p in store.image_dir.iterdir())


def test_publish_discards_uploads_when_insert_fails(db, store, monkeypatch):
    def fail(*args, **kwargs):
        raise RuntimeError("connection lost")
    monkeypatch.setattr(crud, "create_ad", fail)
    with pytest.raises(RuntimeError):
        services.publish_ad(db, store, _content(), [("a.png", b"a", "image/png"), ("b.png", b"b", "image/png")])
    assert _stored_files(store) == []


def test_publish_discards_partial_uploads(db, store, monkeypatch):
    real_save = store.save
    calls = []

    def flaky_save(name, data, mime):
        calls.append(name)
        if len(calls) == 2:
            raise OSError("disk full")
        return real_save(name, data, mime)
    monkeypatch.setattr(store, "save", flaky_save)
    with pytest.raises(OSError):
        services.publish_ad(db, store, _content(), [("a.png", b"a", "image/png"), ("b.png", b"b", "image/png")])
    assert _stored_files(store) == []
    assert crud.list_ads(db)["total"] == 0


def test_replace_discards_new_uploads_when_update_fails(db, store, monkeypatch):
    obj = services.publish_ad(db, store, _content(), [("a.png", b"a", "image/png")])
    kept = obj.images[0]

    def fail(*args, **kwargs):
        raise RuntimeError("connection lost")
    monkeypatch.setattr(crud, "update_ad", fail)
    with pytest.raises(RuntimeError):
        services.replace_ad(db, store, obj.id, _content(title="New"), keep_image_ids=[],
                            uploads=[("b.png", b"b", "image/png")])
    # old image untouched, new upload gone
    assert _stored_files(store) == sorted([kept, f"{kept}.meta"])
    assert crud.get_ad(db, obj.id).images == [kept]
