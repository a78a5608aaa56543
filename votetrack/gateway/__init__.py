# Local application imports
from votetrack.gateway.protocol import PersistenceGateway, VoteRecordDraft
from votetrack.gateway.sqlalchemy_gateway import SQLAlchemyGateway

__all__ = ["PersistenceGateway", "SQLAlchemyGateway", "VoteRecordDraft"]
