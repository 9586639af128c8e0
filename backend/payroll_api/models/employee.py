from sqlalchemy import Column, Date, DateTime, Integer, String, Text, func

from payroll_api.db.base_class import Base


class Employee(Base):
    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(Integer, nullable=False, index=True)

    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    wallet_address = Column(String(56), nullable=True)
    status = Column(String(20), nullable=False, server_default="active")

    # Employment
    position = Column(String(100), nullable=True)
    department = Column(String(100), nullable=True)
    job_title = Column(String(100), nullable=True)
    hire_date = Column(Date, nullable=True)
    date_of_birth = Column(Date, nullable=True)

    # Contact
    phone = Column(String(20), nullable=True)
    address_line1 = Column(String(255), nullable=True)
    address_line2 = Column(String(255), nullable=True)
    city = Column(String(100), nullable=True)
    state_province = Column(String(100), nullable=True)
    postal_code = Column(String(20), nullable=True)
    country = Column(String(100), nullable=True)
    emergency_contact_name = Column(String(200), nullable=True)
    emergency_contact_phone = Column(String(20), nullable=True)

    # Payout
    withdrawal_preference = Column(String(20), nullable=True)
    bank_name = Column(String(100), nullable=True)
    bank_account_number = Column(String(50), nullable=True)
    bank_routing_number = Column(String(50), nullable=True)
    mobile_money_provider = Column(String(50), nullable=True)
    mobile_money_account = Column(String(50), nullable=True)

    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
