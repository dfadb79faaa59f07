from sqlalchemy import Column, String, Integer, DECIMAL, ForeignKey, Date
from sqlalchemy.orm import relationship
from boxoffice.db.session import Base

class Person(Base):
    __tablename__ = "persons"

    id = Column(Integer, primary_key=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=True)

    # Relationships
    user = relationship("User", back_populates="person", uselist=False)
    actor = relationship("Actor", back_populates="person", uselist=False)
    employee = relationship("Employee", back_populates="person", uselist=False)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

class User(Base):
    __tablename__ = "users"

    person_id = Column(Integer, ForeignKey("persons.id"), primary_key=True)
    username = Column(String(100), nullable=False)
    role = Column(String(50), nullable=False, default="user") # free text: admin, user, ...

    person = relationship("Person", back_populates="user")
    reservations = relationship("Reservation", back_populates="user")
    reviews = relationship("Review", back_populates="user")

class Department(Base):
    __tablename__ = "departments"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)

    employees = relationship("Employee", back_populates="department")

class Employee(Base):
    __tablename__ = "employees"

    person_id = Column(Integer, ForeignKey("persons.id"), primary_key=True)
    salary = Column(DECIMAL(10, 2), nullable=False)
    hire_date = Column(Date, nullable=False)
    department_id = Column(Integer, ForeignKey("departments.id"), nullable=False)
    manager_id = Column(Integer, ForeignKey("employees.person_id"), nullable=True) # self-reference

    person = relationship("Person", back_populates="employee")
    department = relationship("Department", back_populates="employees")
    manager = relationship("Employee", remote_side=[person_id])
