"""Purchase recorder: receipts book stock in, reversals book it back out."""

from datetime import date
from decimal import Decimal

import pytest

from models.purchase import Purchase
from models.stock import AdjustmentType, StockAdjustment
from schemas.purchase import PurchaseUpdate
from schemas.sales import SaleCreate
from services import products as catalog
from services import purchases, sales
from utils.errors import DuplicateCode, NotFound


def _stock(db, product):
    return catalog.get_product(db, product.id).current_stock


def test_purchase_adds_stock_with_linked_entry(db, users, make_product, receive):
    product = make_product()

    purchase = receive(product, 24, f_beli="PB-100", codesup="SUP01")

    assert _stock(db, product) == Decimal("24")
    entry = db.query(StockAdjustment).filter(StockAdjustment.ref_id == str(purchase.id)).one()
    assert entry.adjustment_type == AdjustmentType.IN
    assert entry.ref_type == "purchase"
    assert entry.reason == "Purchase receipt PB-100"
    assert entry.user_id == users["warehouse"].id


def test_purchase_for_unknown_product_writes_nothing(db, make_product, receive):
    product = make_product()

    with pytest.raises(NotFound):
        receive(product, 5, kode_brg="MISSING")

    assert db.query(Purchase).count() == 0
    assert db.query(StockAdjustment).count() == 0


def test_duplicate_purchase_document(db, make_product, receive):
    product = make_product()
    receive(product, 5, f_beli="PB-1")

    with pytest.raises(DuplicateCode, match="PB-1"):
        receive(product, 5, f_beli="PB-1")

    assert _stock(db, product) == Decimal("5")


def test_purchase_keeps_legacy_columns(db, make_product, receive):
    product = make_product()

    purchase = receive(product, 1, jt_tempo=30, grup="SNACK", alamat="Jl. Merdeka 1", dateopr=date(2024, 1, 16))

    stored = purchases.get_purchase(db, purchase.id)
    assert (stored.jt_tempo, stored.grup, stored.alamat) == (30, "SNACK", "Jl. Merdeka 1")
    assert stored.dateopr == date(2024, 1, 16)


def test_increase_purchase_quantity_books_difference(db, users, make_product, receive):
    product = make_product()
    purchase = receive(product, 10)

    purchases.update_purchase(db, purchase.id, PurchaseUpdate(jumlah=Decimal("15")), actor_id=users["warehouse"].id)

    assert _stock(db, product) == Decimal("15")


def test_reduce_purchase_quantity_books_difference_out(db, users, make_product, receive):
    product = make_product()
    purchase = receive(product, 10)

    purchases.update_purchase(db, purchase.id, PurchaseUpdate(jumlah=Decimal("4")), actor_id=users["warehouse"].id)

    assert _stock(db, product) == Decimal("4")
    last = db.query(StockAdjustment).order_by(StockAdjustment.id.desc()).first()
    assert last.adjustment_type == AdjustmentType.OUT
    assert last.quantity == Decimal("6")


def test_reduction_below_sold_goods_floors_stock_at_zero(db, users, make_product, receive):
    product = make_product()
    purchase = receive(product, 10)
    sales.create_sale(
        db,
        SaleCreate(
            tgl_jual=date(2024, 2, 1), f_jual="FJ-1", kode_brg=product.kode_brg, nama_brg=product.nama_brg,
            jumlah=Decimal("8"), satuan="PCS", hrg_jual=Decimal("3000"),
        ),
        actor_id=users["cashier"].id,
    )

    purchases.update_purchase(db, purchase.id, PurchaseUpdate(jumlah=Decimal("1")), actor_id=users["warehouse"].id)

    assert _stock(db, product) == Decimal("0")
    assert purchases.get_purchase(db, purchase.id).jumlah == Decimal("1")
    last = db.query(StockAdjustment).order_by(StockAdjustment.id.desc()).first()
    assert (last.adjustment_type, last.quantity) == (AdjustmentType.OUT, Decimal("9"))


def test_delete_purchase_removes_received_stock(db, users, make_product, receive):
    product = make_product()
    purchase = receive(product, 10)

    purchases.delete_purchase(db, purchase.id, actor_id=users["manager"].id)

    assert _stock(db, product) == Decimal("0")
    assert db.query(Purchase).count() == 0
    assert db.query(StockAdjustment).filter(StockAdjustment.ref_type == "purchase").count() == 2


def test_delete_purchase_after_goods_were_sold_floors_stock_at_zero(db, users, make_product, receive):
    product = make_product()
    purchase = receive(product, 10)
    sales.create_sale(
        db,
        SaleCreate(
            tgl_jual=date(2024, 2, 1), f_jual="FJ-2", kode_brg=product.kode_brg, nama_brg=product.nama_brg,
            jumlah=Decimal("3"), satuan="PCS", hrg_jual=Decimal("3000"),
        ),
        actor_id=users["cashier"].id,
    )

    purchases.delete_purchase(db, purchase.id, actor_id=users["manager"].id)

    assert _stock(db, product) == Decimal("0")
    assert db.query(Purchase).count() == 0


def test_update_can_rename_document(db, users, make_product, receive):
    product = make_product()
    receive(product, 1, f_beli="PB-A")
    second = receive(product, 1, f_beli="PB-B")

    with pytest.raises(DuplicateCode):
        purchases.update_purchase(db, second.id, PurchaseUpdate(f_beli="PB-A"), actor_id=users["admin"].id)

    renamed = purchases.update_purchase(db, second.id, PurchaseUpdate(f_beli="PB-C"), actor_id=users["admin"].id)
    assert renamed.f_beli == "PB-C"


def test_purchase_queries(db, make_product, receive):
    product = make_product()
    receive(product, 1, f_beli="P1", tgl_beli=date(2024, 5, 1), codesup="SUP-A")
    receive(product, 1, f_beli="P2", tgl_beli=date(2024, 5, 10), codesup="SUP-B")
    receive(product, 1, f_beli="P3", tgl_beli=date(2024, 5, 20), codesup="SUP-A")

    assert [p.f_beli for p in purchases.list_purchases_by_date_range(db, date(2024, 5, 1), date(2024, 5, 10))] == ["P1", "P2"]
    assert {p.f_beli for p in purchases.list_purchases_by_supplier(db, "SUP-A")} == {"P1", "P3"}
    assert [p.f_beli for p in purchases.list_purchases(db)] == ["P3", "P2", "P1"]


def test_purchase_net_price(db, make_product, receive):
    product = make_product()

    purchase = receive(product, 10, hrg_beli=Decimal("2000"), disc1=Decimal("5"), disc2=Decimal("5"))

    assert purchase.harga_net == Decimal("1805")
    assert purchase.total == Decimal("18050")


def test_deleted_purchase_id_is_not_reused_by_the_next_receipt(db, users, make_product, receive):
    first = make_product()
    second = make_product()

    gone = receive(first, 10, f_beli="PB-A")
    purchases.delete_purchase(db, gone.id, actor_id=users["manager"].id)
    later = receive(second, 10, f_beli="PB-B")
    purchases.update_purchase(db, later.id, PurchaseUpdate(jumlah=Decimal("4")), actor_id=users["warehouse"].id)

    assert later.id != gone.id
    assert later.product_id == second.id
    assert _stock(db, first) == Decimal("0")
    assert _stock(db, second) == Decimal("4")
