from typing import Optional
from sqlalchemy.orm import Session

from app.api.payments.models.model_employee import EmployeeModel


class EmployeeRepository:
    """Repository de funcionários"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_registration_number(self, registration_number: int) -> Optional[EmployeeModel]:
        return (
            self.db.query(EmployeeModel)
            .filter(EmployeeModel.registration_number == registration_number)
            .first()
        )

    def create(self, **data) -> EmployeeModel:
        employee = EmployeeModel(**data)
        self.db.add(employee)
        self.db.flush()
        return employee
