from sqlalchemy.orm import Session

from tenant_api.models.lease_agreement import LeaseAgreement, LeaseStatus


class LeaseAgreementRepository:
    """Repository for LeaseAgreement model operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, lease_id: int) -> LeaseAgreement | None:
        return self.db.query(LeaseAgreement).filter(LeaseAgreement.id == lease_id).first()

    def get_all(self, status: LeaseStatus | None = None) -> list[LeaseAgreement]:
        query = self.db.query(LeaseAgreement)
        if status is not None:
            query = query.filter(LeaseAgreement.status == status)
        return query.order_by(LeaseAgreement.start_date.desc(), LeaseAgreement.id.desc()).all()

    def get_by_tenant(self, tenant_id: int) -> list[LeaseAgreement]:
        return (
            self.db.query(LeaseAgreement)
            .filter(LeaseAgreement.tenant_id == tenant_id)
            .order_by(LeaseAgreement.start_date.desc(), LeaseAgreement.id.desc())
            .all()
        )

    def create(self, lease: LeaseAgreement) -> LeaseAgreement:
        self.db.add(lease)
        self.db.commit()
        self.db.refresh(lease)
        return lease

    def update(self, lease: LeaseAgreement) -> LeaseAgreement:
        self.db.commit()
        self.db.refresh(lease)
        return lease
