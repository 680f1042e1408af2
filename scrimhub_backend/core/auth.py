import secrets
from typing import Optional

from fastapi import APIRouter, HTTPException, Depends, Header
from sqlmodel import Session, select
from passlib.context import CryptContext

from scrimhub_backend.core.database import get_session
from scrimhub_backend.core.logger import setup_logger
from scrimhub_backend.models.admin_model import Admin, AdminSession, AdminRegister, AdminLogin

router = APIRouter()
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
logger = setup_logger(__name__)


# === REGISTER ===

@router.post("/register")
def register_admin(data: AdminRegister, session: Session = Depends(get_session)):
    existing = session.exec(select(Admin).where(Admin.email == data.email)).first()
    if existing:
        raise HTTPException(status_code=400, detail="Admin already exists")

    hashed = pwd_context.hash(data.password)
    new_admin = Admin(email=data.email, password_hash=hashed)
    session.add(new_admin)
    session.commit()

    logger.info(f"Registered admin {data.email}")
    return {"message": "Admin registered"}


# === LOGIN ===

@router.post("/login")
def login_admin(data: AdminLogin, session: Session = Depends(get_session)):
    admin = session.exec(select(Admin).where(Admin.email == data.email)).first()
    if not admin:
        raise HTTPException(status_code=401, detail="Invalid credentials")

    if not pwd_context.verify(data.password, admin.password_hash):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = secrets.token_urlsafe(32)
    session.add(AdminSession(admin_id=admin.id, token=token))
    session.commit()

    return {"message": "Login successful", "token": token, "token_type": "bearer"}


# === CURRENT ADMIN ===

def require_admin(
    authorization: Optional[str] = Header(default=None),
    session: Session = Depends(get_session),
) -> Admin:
    """
    Resolves `Authorization: Bearer <token>` to the logged-in Admin.
    Inject into any route that only admins may call.
    """
    if not authorization:
        raise HTTPException(status_code=401, detail="Not authenticated")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(status_code=401, detail="Not authenticated")

    admin_session = session.exec(
        select(AdminSession).where(AdminSession.token == token.strip())
    ).first()
    if not admin_session:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    admin = session.get(Admin, admin_session.admin_id)
    if not admin:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    return admin
