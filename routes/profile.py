from flask import Blueprint, jsonify, current_app
from models import db, Listing
from guards import auth_required
from utils import get_json_body, get_str, parse_quantity

profile_bp = Blueprint('profile', __name__)

PROFILE_FIELDS = ('name', 'organization', 'location', 'phone')


@profile_bp.route('/profile', methods=['GET'])
@auth_required
def get_profile(auth):
    return jsonify(auth.user.to_dict()), 200


@profile_bp.route('/profile', methods=['PUT'])
@auth_required
def update_profile(auth):
    """
    Updates name, organization, location and phone only.
    A missing or empty value keeps what is stored, so a field cannot be
    cleared through this endpoint. Email, role and password never change here.
    """
    data = get_json_body()
    user = auth.user

    updates = {field: get_str(data, field) for field in PROFILE_FIELDS}
    for field, value in updates.items():
        setattr(user, field, value or getattr(user, field))

    db.session.commit()
    current_app.logger.info("User %s updated their profile", user.id)

    return jsonify(user.to_dict()), 200


@profile_bp.route('/profile/listings', methods=['GET'])
@auth_required
def get_my_listings(auth):
    """
    Donors see what they posted (with the claimant's contact details).
    Receivers see what they claimed (with the donor's contact details).
    """
    results = []

    if auth.role == 'donor':
        listings = Listing.query.filter_by(user_id=auth.user_id)\
            .order_by(Listing.created_at.desc(), Listing.id.desc()).all()

        for l in listings:
            item = l.to_dict()
            item['receiver'] = l.receiver.contact_dict() if l.receiver else None
            results.append(item)
    else:
        listings = Listing.query.filter_by(claimed_by=auth.user_id)\
            .order_by(Listing.created_at.desc(), Listing.id.desc()).all()

        for l in listings:
            item = l.to_dict()
            item['donor'] = l.donor.contact_dict(include_location=True)
            results.append(item)

    return jsonify(results), 200


@profile_bp.route('/profile/stats', methods=['GET'])
@auth_required
def get_my_stats(auth):
    if auth.role == 'donor':
        listings = Listing.query.filter_by(user_id=auth.user_id).all()
        stats = {
            'totalListings': len(listings),
            'availableListings': sum(1 for l in listings if l.status == 'available'),
            'claimedListings': sum(1 for l in listings if l.status == 'claimed'),
            'completedListings': sum(1 for l in listings if l.status == 'completed'),
            'totalDonations': sum(parse_quantity(l.quantity) for l in listings)
        }
    else:
        listings = Listing.query.filter_by(claimed_by=auth.user_id).all()
        stats = {
            'totalClaims': len(listings),
            'activeClaims': sum(1 for l in listings if l.status == 'claimed'),
            'completedClaims': sum(1 for l in listings if l.status == 'completed'),
            'totalReceived': sum(parse_quantity(l.quantity) for l in listings)
        }

    current_app.logger.debug("Stats for user %s: %s", auth.user_id, stats)
    return jsonify(stats), 200
