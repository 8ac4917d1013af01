from werkzeug.security import generate_password_hash, check_password_hash
from datetime import datetime, timezone
from sqlalchemy.orm import validates
from extensions import db
from errors import NotFound, Conflict

USER_ROLES = ('donor', 'receiver')
LISTING_STATUSES = ('available', 'claimed', 'completed')

# Column name -> field name used in request bodies
FIELD_LABELS = {'food_type': 'foodType'}


def _utcnow():
    return datetime.now(timezone.utc)


def _isoformat(value):
    return value.isoformat() if value else None


# ==========================================
#  1. USER MODEL
# ==========================================
class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)
    role = db.Column(db.String(20), nullable=False)

    # --- OPTIONAL CONTACT FIELDS ---
    organization = db.Column(db.String(150), nullable=True)
    location = db.Column(db.String(150), nullable=True)
    phone = db.Column(db.String(30), nullable=True)

    # --- TIMESTAMPS ---
    created_at = db.Column(db.DateTime, default=_utcnow)
    updated_at = db.Column(db.DateTime, default=_utcnow, onupdate=_utcnow)

    listings = db.relationship('Listing', foreign_keys='Listing.user_id', backref='donor', lazy=True)
    claimed_listings = db.relationship('Listing', foreign_keys='Listing.claimed_by', backref='receiver', lazy=True)

    @validates('role')
    def validate_role(self, key, value):
        if value not in USER_ROLES:
            raise ValueError('role must be either "donor" or "receiver"')
        return value

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    def to_dict(self):
        """Full account view. The password hash is never part of it."""
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role,
            'organization': self.organization,
            'location': self.location,
            'phone': self.phone,
            'createdAt': _isoformat(self.created_at),
            'updatedAt': _isoformat(self.updated_at),
        }

    def public_dict(self):
        """What anyone browsing listings may see about a donor."""
        return {
            'id': self.id,
            'name': self.name,
            'organization': self.organization,
            'location': self.location,
        }

    def contact_dict(self, include_location=False):
        """Contact details, shown only to the other side of a claim."""
        data = {
            'id': self.id,
            'name': self.name,
            'organization': self.organization,
            'email': self.email,
            'phone': self.phone,
        }
        if include_location:
            data['location'] = self.location
        return data


# ==========================================
#  2. LISTING MODEL
# ==========================================
class Listing(db.Model):
    __tablename__ = 'listings'

    id = db.Column(db.Integer, primary_key=True)
    food_type = db.Column(db.String(100), nullable=False)
    quantity = db.Column(db.String(50), nullable=False)  # e.g. "5 kg", "10 boxes"
    description = db.Column(db.Text)
    location = db.Column(db.String(150), nullable=False)

    # 'completed' has no handler yet
    status = db.Column(db.Enum(*LISTING_STATUSES, name='listing_status'), default='available', nullable=False, index=True)

    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    claimed_by = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True, index=True)

    # --- TIMESTAMPS ---
    created_at = db.Column(db.DateTime, default=_utcnow)
    updated_at = db.Column(db.DateTime, default=_utcnow, onupdate=_utcnow)

    @validates('food_type', 'quantity', 'location')
    def validate_required(self, key, value):
        if value is None or not str(value).strip():
            raise ValueError(f"{FIELD_LABELS.get(key, key)} is required")
        return value

    @classmethod
    def claim(cls, listing_id, receiver_id):
        """
        Moves a listing from 'available' to 'claimed' for one receiver.

        The status check and the write are a single conditional UPDATE, so
        when several receivers race for the same listing the database lets
        exactly one of them through. The caller commits.
        """
        updated = cls.query.filter_by(id=listing_id, status='available').update(
            {'status': 'claimed', 'claimed_by': receiver_id, 'updated_at': _utcnow()},
            synchronize_session=False
        )
        if updated == 0:
            if db.session.get(cls, listing_id) is None:
                raise NotFound('Listing not found')
            raise Conflict('Listing already claimed')

        listing = db.session.get(cls, listing_id)
        db.session.refresh(listing)
        return listing

    def to_dict(self):
        return {
            'id': self.id,
            'foodType': self.food_type,
            'quantity': self.quantity,
            'description': self.description,
            'location': self.location,
            'status': self.status,
            'userId': self.user_id,
            'claimedBy': self.claimed_by,
            'createdAt': _isoformat(self.created_at),
            'updatedAt': _isoformat(self.updated_at),
        }
