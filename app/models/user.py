from sqlalchemy import Column, Integer, String, DateTime, Boolean, Text
from datetime import datetime
from app.database import Base
import bcrypt

BCRYPT_MAX_BYTES = 72


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)  # Case-sensitive as stored
    password = Column(String(255), nullable=False)  # bcrypt hash, never serialized
    name = Column(String(255), nullable=False)

    # Profile
    phone = Column(String(50), nullable=False, default="")
    company = Column(String(255), nullable=False, default="")
    address = Column(String(500), nullable=False, default="")
    bio = Column(Text, nullable=False, default="")

    is_employer = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    @staticmethod
    def _password_bytes(password: str) -> bytes:
        # bcrypt only uses the first 72 bytes; newer releases refuse longer input
        return password.encode('utf-8')[:BCRYPT_MAX_BYTES]

    @staticmethod
    def hash_password(password: str, rounds: int = 10) -> str:
        """Hash a password using bcrypt"""
        salt = bcrypt.gensalt(rounds=rounds)
        hashed = bcrypt.hashpw(User._password_bytes(password), salt)
        return hashed.decode('utf-8')

    def verify_password(self, password: str) -> bool:
        """Verify a password against the stored hash"""
        try:
            return bcrypt.checkpw(self._password_bytes(password), self.password.encode('utf-8'))
        except ValueError:
            # Malformed stored hash
            return False

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "phone": self.phone,
            "company": self.company,
            "address": self.address,
            "bio": self.bio,
            "isEmployer": self.is_employer,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

    def to_contact_dict(self):
        """Employer contact fields embedded in a job detail"""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "company": self.company,
        }
