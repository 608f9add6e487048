from flask import Blueprint, jsonify

bp = Blueprint('home', __name__)

@bp.route('/health')
def health():
    return jsonify({'status': 'ok', 'message': 'Backend está funcionando'})
