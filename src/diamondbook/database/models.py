"""SQLAlchemy models for diamondbook database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _now() -> datetime:
    return datetime.now(UTC)


class Client(Base):
    """Client model with per-client pricing."""

    __tablename__ = "clients"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    contact_person = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    email = Column(String, nullable=True)
    company = Column(String, nullable=True)
    location = Column(String, nullable=True)
    plus_rate = Column(Numeric(14, 2), nullable=False, default=0)
    minus_rate = Column(Numeric(14, 2), nullable=False, default=0)
    payment_terms = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)

    # Relationships
    diamonds = relationship("Diamond", back_populates="client")
    invoices = relationship("Invoice", back_populates="client")


class Diamond(Base):
    """Diamond parcel entry model."""

    __tablename__ = "diamonds"

    id = Column(Integer, primary_key=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False)
    kapan_id = Column(String, nullable=False)
    entry_date = Column(Date, nullable=False)
    number_of_diamonds = Column(Integer, nullable=False)
    weight_in_karats = Column(Numeric(12, 3), nullable=False)
    market_rate = Column(Numeric(14, 2), nullable=False, default=0)
    category = Column(String, nullable=False)
    raw_damage_weight = Column(Numeric(12, 3), nullable=True)
    total_value = Column(Numeric(16, 2), nullable=False, default=0)
    created_at = Column(DateTime, default=_now, nullable=False)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)

    # Relationships
    client = relationship("Client", back_populates="diamonds")
    invoice_link = relationship("InvoiceDiamond", back_populates="diamond", uselist=False)


class Invoice(Base):
    """Invoice header model."""

    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True)
    invoice_number = Column(String, unique=True, nullable=False)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False)
    issue_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=False)
    total_amount = Column(Numeric(16, 2), nullable=False, default=0)
    status = Column(String, nullable=False, default="pending")
    payment_date = Column(DateTime, nullable=True)
    payment_method = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)

    # Relationships
    client = relationship("Client", back_populates="invoices")
    diamond_links = relationship(
        "InvoiceDiamond",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="InvoiceDiamond.position",
    )


class InvoiceDiamond(Base):
    """Ordered link between an invoice and the diamond entries it bills."""

    __tablename__ = "invoice_diamonds"

    id = Column(Integer, primary_key=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id"), nullable=False)
    diamond_id = Column(Integer, ForeignKey("diamonds.id"), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    # A diamond entry can be billed on only one invoice
    __table_args__ = (UniqueConstraint("diamond_id", name="uq_invoice_diamond"),)

    # Relationships
    invoice = relationship("Invoice", back_populates="diamond_links")
    diamond = relationship("Diamond", back_populates="invoice_link")


class CompanyDetails(Base):
    """Company letterhead and bank details model (single row)."""

    __tablename__ = "company_details"

    id = Column(Integer, primary_key=True)
    company_name = Column(String, nullable=False)
    address = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    email = Column(String, nullable=True)
    gst_number = Column(String, nullable=True)
    bank_name = Column(String, nullable=False)
    account_number = Column(String, nullable=False)
    ifsc_code = Column(String, nullable=False)
    branch = Column(String, nullable=True)
    account_holder_name = Column(String, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)


class MarketRate(Base):
    """Market rate snapshot model."""

    __tablename__ = "market_rates"

    id = Column(Integer, primary_key=True)
    rate_date = Column(Date, nullable=False)
    plus_rate = Column(Numeric(14, 2), nullable=False)
    minus_rate = Column(Numeric(14, 2), nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
