from flask import Blueprint, request, jsonify, current_app
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from models import db, Listing
from errors import InvalidInput, NotFound, Conflict
from guards import auth_required, require_role
from utils import get_json_body, get_str

listings_bp = Blueprint('listings', __name__)


def _public_view(listing):
    # Browsing never exposes the donor's email or phone
    data = listing.to_dict()
    data['donor'] = listing.donor.public_dict() if listing.donor else None
    return data


def _available_listings(query_text=None):
    query = Listing.query.filter(Listing.status == 'available')
    if query_text:
        # % and _ in the query are literal characters, not wildcards
        query = query.filter(func.lower(Listing.food_type).contains(query_text.lower(), autoescape=True))
    return query.order_by(Listing.created_at.desc(), Listing.id.desc()).all()


# ==========================================
#  1. BROWSE (Feed)
# ==========================================
@listings_bp.route('/listings', methods=['GET'])
def get_listings():
    """Returns every available listing, newest first."""
    return jsonify({
        'success': True,
        'data': [_public_view(l) for l in _available_listings()]
    }), 200


# ==========================================
#  2. SEARCH
# ==========================================
@listings_bp.route('/listings/search', methods=['GET'])
def search_listings():
    """Case-insensitive substring match on foodType. Empty q returns everything."""
    q = request.args.get('q', '').strip()
    return jsonify({
        'success': True,
        'data': [_public_view(l) for l in _available_listings(q)]
    }), 200


# ==========================================
#  3. GET SINGLE LISTING
# ==========================================
@listings_bp.route('/listings/<int:listing_id>', methods=['GET'])
def get_listing(listing_id):
    listing = db.session.get(Listing, listing_id)
    if not listing:
        raise NotFound('Listing not found')

    return jsonify({'success': True, 'data': _public_view(listing)}), 200


# ==========================================
#  4. CREATE LISTING
# ==========================================
@listings_bp.route('/listings', methods=['POST'])
@auth_required
def create_listing(auth):
    require_role(auth, 'donor', message='Only donors can create listings')

    data = get_json_body()

    try:
        new_listing = Listing(
            food_type=get_str(data, 'foodType'),
            quantity=get_str(data, 'quantity'),
            description=get_str(data, 'description'),
            location=get_str(data, 'location'),
            user_id=auth.user_id
        )
        db.session.add(new_listing)
        db.session.commit()
    except (ValueError, IntegrityError) as e:
        db.session.rollback()
        raise InvalidInput(str(e) if isinstance(e, ValueError) else 'Missing required listing fields')

    current_app.logger.info("User %s posted listing %s (%s)", auth.user_id, new_listing.id, new_listing.food_type)

    return jsonify({'success': True, 'data': new_listing.to_dict()}), 201


# ==========================================
#  5. CLAIM LISTING
# ==========================================
@listings_bp.route('/listings/<int:listing_id>/claim', methods=['PATCH'])
@auth_required
def claim_listing(listing_id, auth):
    require_role(auth, 'receiver', message='Only receivers can claim listings')

    try:
        listing = Listing.claim(listing_id, auth.user_id)
        db.session.commit()
    except (NotFound, Conflict) as e:
        db.session.rollback()
        current_app.logger.warning("Claim on listing %s by user %s rejected: %s", listing_id, auth.user_id, e.message)
        raise

    current_app.logger.info("User %s claimed listing %s", auth.user_id, listing_id)

    return jsonify({'success': True, 'data': listing.to_dict()}), 200
