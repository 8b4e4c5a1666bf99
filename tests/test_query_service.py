import pytest

from app.features.errors import ValidationError
from conftest import make_order


@pytest.fixture
def seeded(consistency):
    consistency.create_customer("zoe@example.com")
    consistency.create_order(make_order(numero_commande="CMD-001", email_client="amina@example.com",
                                        nom_produit="Casque", prix_achat=100, prix_vente=150))
    consistency.create_order(make_order(numero_commande="CMD-002", email_client="youssef@example.com",
                                        nom_produit="Souris", statut="Livrée", quantite=3,
                                        prix_achat=20, prix_vente=35))
    consistency.create_order(make_order(numero_commande="CMD-003", email_client="amina@example.com",
                                        nom_produit="Clavier", statut="Livrée",
                                        prix_achat=40, prix_vente=30))


def test_list_orders_most_recent_first(seeded, queries):
    numbers = [o.numero_commande for o in queries.list_orders()]
    assert numbers == ["CMD-003", "CMD-002", "CMD-001"]


def test_list_customers_sorted_with_counts(seeded, queries):
    rows = [(c.email, c.order_count) for c in queries.list_customers()]
    assert rows == [
        ("amina@example.com", 2),
        ("youssef@example.com", 1),
        ("zoe@example.com", 0),
    ]


def test_list_customers_search(seeded, queries):
    assert [c.email for c in queries.list_customers(q="YOUS")] == ["youssef@example.com"]


def test_list_orders_filters(seeded, queries):
    assert [o.numero_commande for o in queries.list_orders(statut="Livrée")] == ["CMD-003", "CMD-002"]
    assert [o.numero_commande for o in queries.list_orders(email_client="amina@example.com")] == [
        "CMD-003",
        "CMD-001",
    ]
    assert [o.numero_commande for o in queries.list_orders(q="souris")] == ["CMD-002"]
    assert [o.numero_commande for o in queries.list_orders(q="cmd-00", statut="Expédiée")] == ["CMD-001"]


def test_list_orders_sort(seeded, queries):
    by_qty = queries.list_orders(sort="quantite", direction="asc")
    assert [o.quantite for o in by_qty] == [1, 1, 3]
    by_price = queries.list_orders(sort="prix_vente", direction="desc")
    assert [o.prix_vente for o in by_price] == [150, 35, 30]


@pytest.mark.parametrize(
    "kwargs",
    [{"statut": "Annulée"}, {"sort": "prix_achat; DROP TABLE orders"}, {"direction": "up"}],
)
def test_list_orders_rejects_bad_parameters(queries, kwargs):
    with pytest.raises(ValidationError):
        queries.list_orders(**kwargs)


def test_stats(seeded, queries):
    stats = queries.order_stats()
    assert stats == {
        "order_count": 3,
        "total_sales": 215.0,
        "total_profit": 55.0,
        "delivered_count": 2,
    }


def test_stats_empty_store(queries):
    assert queries.order_stats() == {
        "order_count": 0,
        "total_sales": 0.0,
        "total_profit": 0.0,
        "delivered_count": 0,
    }


def test_total_profit_single_order_then_customer_deletable(consistency, queries):
    order = consistency.create_order(make_order(statut="Expédiée", prix_achat=100, prix_vente=150))
    assert queries.order_stats()["total_profit"] == 50

    consistency.delete_order(order.id)
    customer = queries.list_customers()[0]
    assert customer.order_count == 0
    consistency.delete_customer(customer.id)
    assert queries.list_customers() == []


@pytest.mark.parametrize("q", ["_", "%", "CMD%1"])
def test_search_wildcards_are_literal(consistency, queries, q):
    consistency.create_order(make_order(numero_commande="CMD-1"))
    consistency.create_order(make_order(numero_commande="CMD-2"))

    assert queries.list_orders(q=q) == []


def test_search_matches_literal_underscore_and_percent(consistency, queries):
    consistency.create_order(make_order(numero_commande="CMD_1", email_client="a_b@example.com"))
    consistency.create_order(make_order(numero_commande="CMD-2", email_client="axb@example.com",
                                        nom_produit="Remise 10%"))

    assert [o.numero_commande for o in queries.list_orders(q="_")] == ["CMD_1"]
    assert [o.numero_commande for o in queries.list_orders(q="10%")] == ["CMD-2"]
    assert [c.email for c in queries.list_customers(q="_")] == ["a_b@example.com"]
    assert [c.email for c in queries.list_customers(q="%")] == []
