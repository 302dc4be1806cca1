"""SQLAlchemy ORM models for marketplace entities."""

from datetime import date, datetime
from uuid import uuid4

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    JSON,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


class TenantModel(Base):
    """Persisted tenant profile, keyed by the auth provider's user id."""

    __tablename__ = "tenants"

    supabase_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    profile_image: Mapped[str | None] = mapped_column(Text, nullable=True)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    current_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    ssn: Mapped[str | None] = mapped_column(String(16), nullable=True)
    credit_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    last_credit_check: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    background_check_status: Mapped[str | None] = mapped_column(String(32), nullable=True)
    is_renting: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    linkedin_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    facebook_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    instagram_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    occupation: Mapped[str | None] = mapped_column(String(255), nullable=True)
    income: Mapped[float | None] = mapped_column(Float, nullable=True)
    preferred_move_in_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)

    credit_card_last4: Mapped[str | None] = mapped_column(String(4), nullable=True)
    credit_card_brand: Mapped[str | None] = mapped_column(String(32), nullable=True)
    credit_card_expiry: Mapped[str | None] = mapped_column(String(7), nullable=True)

    verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    identity_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    identity_verified_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    bank_account_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    bank_account_verified_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    plaid_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    plaid_verified_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    verified_income: Mapped[float | None] = mapped_column(Float, nullable=True)
    income_verified_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    verified_first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    verified_last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    verified_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    verified_phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    verified_address: Mapped[str | None] = mapped_column(Text, nullable=True)

    plaid_access_token: Mapped[str | None] = mapped_column(String(255), nullable=True)
    plaid_item_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    plaid_institution_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    plaid_institution_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    bank_accounts: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=datetime.utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )


class LandlordModel(Base):
    """Persisted landlord profile, keyed by the auth provider's user id."""

    __tablename__ = "landlords"

    supabase_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    profile_image: Mapped[str | None] = mapped_column(Text, nullable=True)

    linkedin_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    facebook_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    instagram_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    website_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    company_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    business_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    tax_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    years_of_experience: Mapped[int | None] = mapped_column(Integer, nullable=True)

    preferred_payment_method: Mapped[str | None] = mapped_column(String(32), nullable=True)
    bank_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    account_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    account_number: Mapped[str | None] = mapped_column(String(64), nullable=True)
    routing_number: Mapped[str | None] = mapped_column(String(64), nullable=True)
    e_transfer_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    e_transfer_phone: Mapped[str | None] = mapped_column(String(32), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=datetime.utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    properties: Mapped[list["PropertyModel"]] = relationship(
        "PropertyModel",
        back_populates="landlord",
        cascade="all, delete-orphan",
    )


class PropertyModel(Base):
    """Persisted rental listing."""

    __tablename__ = "properties"

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    landlord_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("landlords.supabase_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    address: Mapped[str] = mapped_column(Text, nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    state: Mapped[str] = mapped_column(String(100), nullable=False)
    postal_code: Mapped[str] = mapped_column(String(16), nullable=False)
    country: Mapped[str] = mapped_column(String(64), nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    property_type: Mapped[str] = mapped_column(String(32), nullable=False)
    style: Mapped[str] = mapped_column(String(32), nullable=False)
    available_date: Mapped[date] = mapped_column(Date, nullable=False)
    bedrooms: Mapped[int] = mapped_column(Integer, nullable=False)
    bathrooms: Mapped[float] = mapped_column(Float, nullable=False)
    heating_and_ac: Mapped[str] = mapped_column(String(32), nullable=False)
    laundry_type: Mapped[str] = mapped_column(String(32), nullable=False)
    has_parking: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    parking_spaces: Mapped[int | None] = mapped_column(Integer, nullable=True)
    floor_number: Mapped[int | None] = mapped_column(Integer, nullable=True)
    unit_number: Mapped[str | None] = mapped_column(String(32), nullable=True)
    total_square_feet: Mapped[int | None] = mapped_column(Integer, nullable=True)
    room_details: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    has_microwave: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    has_refrigerator: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_pet_friendly: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    has_basement: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    photos: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    is_leased: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    num_applicants: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=datetime.utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    landlord: Mapped["LandlordModel"] = relationship(
        "LandlordModel",
        back_populates="properties",
    )
    applications: Mapped[list["ApplicationModel"]] = relationship(
        "ApplicationModel",
        back_populates="property",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    favorites: Mapped[list["FavoriteModel"]] = relationship(
        "FavoriteModel",
        back_populates="property",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class ApplicationModel(Base):
    """Persisted rental application."""

    __tablename__ = "applications"

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    tenant_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("tenants.supabase_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    property_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Snapshot of the property's landlord at creation time.
    landlord_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="Pending")
    documents: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    has_id: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    has_bank_statement: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    has_form_410: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=datetime.utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    property: Mapped["PropertyModel"] = relationship(
        "PropertyModel",
        back_populates="applications",
    )
    notes: Mapped[list["ApplicationNoteModel"]] = relationship(
        "ApplicationNoteModel",
        back_populates="application",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ApplicationNoteModel.created_at.desc()",
    )


class ApplicationNoteModel(Base):
    """Persisted note on an application."""

    __tablename__ = "application_notes"

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    application_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("applications.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    creator_type: Mapped[str] = mapped_column(String(16), nullable=False)
    creator_id: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=datetime.utcnow,
    )

    application: Mapped["ApplicationModel"] = relationship(
        "ApplicationModel",
        back_populates="notes",
    )


class FavoriteModel(Base):
    """Persisted tenant/property bookmark."""

    __tablename__ = "favorites"
    __table_args__ = (
        UniqueConstraint("tenant_id", "property_id", name="uq_favorites_tenant_property"),
    )

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    tenant_id: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("tenants.supabase_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    property_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=datetime.utcnow,
    )

    property: Mapped["PropertyModel"] = relationship(
        "PropertyModel",
        back_populates="favorites",
    )


class NewsletterSubscriberModel(Base):
    """Persisted newsletter subscriber."""

    __tablename__ = "newsletter_subscribers"

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    subscribed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=datetime.utcnow,
    )
