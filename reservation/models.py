from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from reservation.database import Base

# ================================
# Trains & Seat Classes
# ================================
class TrainRecord(Base):
    __tablename__ = "trains"

    train_number = Column(String(20), primary_key=True)
    train_name = Column(String(255), nullable=False)
    position = Column(Integer, nullable=False)

    # Relationships
    seat_classes = relationship(
        "SeatClassRecord",
        back_populates="train",
        cascade="all, delete-orphan",
        order_by="SeatClassRecord.position"
    )

class SeatClassRecord(Base):
    __tablename__ = "seat_classes"
    __table_args__ = (UniqueConstraint("train_number", "class_type"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    train_number = Column(String(20), ForeignKey("trains.train_number"), nullable=False, index=True)
    class_type = Column(String(50), nullable=False)
    total_seats = Column(Integer, nullable=False)
    available_seats = Column(Integer, nullable=False)
    position = Column(Integer, nullable=False)

    # Relationships
    train = relationship("TrainRecord", back_populates="seat_classes")

# ================================
# Passengers / Bookings
# ================================
class PassengerRecord(Base):
    __tablename__ = "passengers"

    pnr = Column(String(20), primary_key=True)
    name = Column(String(255), nullable=False)
    age = Column(Integer, nullable=False)
    gender = Column(String(1), nullable=False)
    train_number = Column(String(20), nullable=False, index=True)
    class_type = Column(String(50), nullable=False)
    seat_number = Column(String(10))
    status = Column(String(20), nullable=False, index=True)
    booked_at = Column(DateTime, nullable=False)
    position = Column(Integer, nullable=False)
    waitlist_position = Column(Integer)  # Set only while queued for a seat
