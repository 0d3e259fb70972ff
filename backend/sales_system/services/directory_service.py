# Overview: Agents, sales reps, suppliers, and shops.

from __future__ import annotations

from ..errors import ConflictError, NotFound
from ..extensions import db
from ..models import Agent, InventoryRecord, Order, SalesRep, Shop, Supplier
from ..validation import (
    ADDRESS_MAX,
    NAME_MAX,
    PHONE_MAX,
    optional_text,
    require_id,
    require_text,
)
from .concurrency import begin_write_transaction, run_in_transaction


# -- agents -----------------------------------------------------------------

def list_agents() -> list[dict]:
    return [agent.to_dict() for agent in db.session.query(Agent).order_by(Agent.id).all()]


def get_agent(agent_id) -> Agent:
    agent_id = require_id(agent_id, "agent_id")
    agent = db.session.get(Agent, agent_id)
    if agent is None:
        raise NotFound("Agent not found", details={"agent_id": agent_id})
    return agent


def _agent_fields(name, phone_no, location) -> dict:
    return {
        "name": require_text(name, "Agent name", max_length=NAME_MAX),
        "phone_no": optional_text(phone_no, "phone_no", max_length=PHONE_MAX),
        "location": optional_text(location, "location", max_length=NAME_MAX),
    }


def create_agent(*, name, phone_no=None, location=None) -> Agent:
    fields = _agent_fields(name, phone_no, location)

    def _op():
        agent = Agent(**fields)
        db.session.add(agent)
        db.session.commit()
        return agent

    return run_in_transaction(_op, action="create agent")


def update_agent(agent_id, *, name, phone_no=None, location=None) -> Agent:
    agent_id = require_id(agent_id, "agent_id")
    fields = _agent_fields(name, phone_no, location)

    def _op():
        agent = db.session.get(Agent, agent_id)
        if agent is None:
            raise NotFound("Agent not found", details={"agent_id": agent_id})
        for key, value in fields.items():
            setattr(agent, key, value)
        db.session.commit()
        return agent

    return run_in_transaction(_op, action="update agent")


def delete_agent(agent_id) -> None:
    """
    Remove an agent together with its inventory records.

    Agents referenced by orders cannot be deleted; order history keeps them.
    """
    agent_id = require_id(agent_id, "agent_id")

    def _op():
        begin_write_transaction()
        agent = db.session.get(Agent, agent_id)
        if agent is None:
            raise NotFound("Agent not found", details={"agent_id": agent_id})
        order_count = db.session.query(Order).filter_by(agent_id=agent_id).count()
        if order_count:
            raise ConflictError(
                "Agent has orders and cannot be deleted",
                details={"agent_id": agent_id, "orders": order_count},
            )
        db.session.query(InventoryRecord).filter_by(agent_id=agent_id).delete(synchronize_session="fetch")
        db.session.delete(agent)
        db.session.commit()

    run_in_transaction(_op, action="delete agent")


# -- sales reps ---------------------------------------------------------------

def list_sales_reps() -> list[dict]:
    reps = db.session.query(SalesRep).order_by(SalesRep.id).all()
    return [{"sales_rep_id": rep.id, "name": rep.name} for rep in reps]


def create_sales_rep(*, name, territory=None, phone_number=None) -> SalesRep:
    rep = SalesRep(
        name=require_text(name, "Sales rep name", max_length=NAME_MAX),
        territory=optional_text(territory, "territory", max_length=NAME_MAX),
        phone_number=optional_text(phone_number, "phone_number", max_length=PHONE_MAX),
    )

    def _op():
        db.session.add(rep)
        db.session.commit()
        return rep

    return run_in_transaction(_op, action="create sales rep")


# -- suppliers ----------------------------------------------------------------

def list_suppliers() -> list[dict]:
    suppliers = db.session.query(Supplier).order_by(Supplier.id).all()
    return [{"supplier_id": supplier.id, "name": supplier.name} for supplier in suppliers]


def create_supplier(*, name) -> Supplier:
    supplier = Supplier(name=require_text(name, "Supplier name", max_length=NAME_MAX))

    def _op():
        db.session.add(supplier)
        db.session.commit()
        return supplier

    return run_in_transaction(_op, action="create supplier")


# -- shops --------------------------------------------------------------------

def list_shops() -> list[dict]:
    rows = db.session.query(Shop, SalesRep.name).outerjoin(
        SalesRep, Shop.sales_rep_id == SalesRep.id
    ).order_by(Shop.id).all()

    shops = []
    for shop, sales_rep_name in rows:
        data = shop.to_dict()
        data["sales_rep_name"] = sales_rep_name
        shops.append(data)
    return shops


def shops_for_sales_rep(sales_rep_id) -> list[dict]:
    sales_rep_id = require_id(sales_rep_id, "sales_rep_id")
    shops = db.session.query(Shop).filter_by(sales_rep_id=sales_rep_id).order_by(Shop.id).all()
    return [shop.to_dict() for shop in shops]


def create_shop(*, name, address=None, phone_number=None, sales_rep_id=None) -> Shop:
    name = require_text(name, "Shop name", max_length=NAME_MAX)
    address = optional_text(address, "address", max_length=ADDRESS_MAX)
    phone_number = optional_text(phone_number, "phone_number", max_length=PHONE_MAX)
    if sales_rep_id in (None, ""):
        sales_rep_id = None
    else:
        sales_rep_id = require_id(sales_rep_id, "sales_rep_id")

    def _op():
        if sales_rep_id is not None and db.session.get(SalesRep, sales_rep_id) is None:
            raise NotFound("Sales rep not found", details={"sales_rep_id": sales_rep_id})
        shop = Shop(
            name=name,
            address=address,
            phone_number=phone_number,
            sales_rep_id=sales_rep_id,
        )
        db.session.add(shop)
        db.session.commit()
        return shop

    return run_in_transaction(_op, action="create shop")
