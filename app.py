import os
import logging
from flask import Flask, request, jsonify, send_file
from flask_cors import CORS

import envirosense_config as config
from env_indicators import (
    PARAMETERS,
    EnviroSenseError,
    IndicatorService,
    NotFoundError,
)
from env_indicators.indicator_service import (
    ensure_inside_pakistan,
    parse_date_range,
    resolve_parameter,
)
from integrations import AreaSelectionForm, GeoJSONMapControl, build_history_store
from reports.exporters import export_analysis

log = logging.getLogger('werkzeug')
log.setLevel(logging.ERROR)

logging.basicConfig(level=getattr(logging, config.LOG_LEVEL, logging.INFO))
logger = logging.getLogger(__name__)

# --- Flask App Initialization ---
app = Flask(__name__)
app.json.ensure_ascii = False

ALLOWED_ORIGINS = config.ALLOWED_ORIGINS

CORS(app, resources={r"/*": {
    "origins": ALLOWED_ORIGINS,
    "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    "allow_headers": ["Content-Type", "Authorization", "Accept", config.USER_ID_HEADER]
}})


@app.after_request
def handle_options_and_headers(response):
    origin = request.headers.get('Origin')
    if origin in ALLOWED_ORIGINS:
        # Flask-CORS sets Allow-Origin; only fill it in when missing
        if 'Access-Control-Allow-Origin' not in response.headers:
            response.headers.add('Access-Control-Allow-Origin', origin)

    response.headers.add('Access-Control-Allow-Headers', f'Content-Type,Authorization,{config.USER_ID_HEADER}')
    response.headers.add('Access-Control-Allow-Methods', 'GET,PUT,POST,DELETE,OPTIONS')
    return response


# --- History store (MongoDB Data API or in-memory fallback) ---
HISTORY_STORE = build_history_store()


def _error_response(e: EnviroSenseError):
    logger.warning(f"Rejected request on {request.path}: {e.message}")
    return jsonify(e.to_dict()), e.status_code


def _json_body():
    return request.get_json(silent=True)


def _current_user():
    return request.headers.get(config.USER_ID_HEADER)


# --- 1. Health Check Route ---
@app.route('/health', methods=['GET'])
def health():
    return jsonify({"status": "healthy"}), 200


@app.route('/parameters', methods=['GET'])
def list_parameters():
    return jsonify({"parameters": [spec.describe() for spec in PARAMETERS.values()]})


# --- 2. Indicator Routes (one point and one nation-wide route per parameter) ---
def _make_point_handler(spec):
    def handler():
        if request.method == 'OPTIONS':
            return jsonify({"status": "ok"}), 200
        try:
            return jsonify(IndicatorService.handle_point_request(spec, _json_body()))
        except EnviroSenseError as e:
            return _error_response(e)
        except Exception as e:
            logger.exception(f"{spec.label} analysis error: {e}")
            return jsonify({"error": str(e)}), 500

    handler.__name__ = f"{spec.id}_point"
    return handler


def _make_national_handler(spec):
    def handler():
        if request.method == 'OPTIONS':
            return jsonify({"status": "ok"}), 200
        try:
            return jsonify(IndicatorService.handle_national_request(spec, _json_body()))
        except EnviroSenseError as e:
            return _error_response(e)
        except Exception as e:
            logger.exception(f"{spec.label} nation-wide error: {e}")
            return jsonify({"error": str(e)}), 500

    handler.__name__ = f"{spec.id}_national"
    return handler


for _spec in PARAMETERS.values():
    app.add_url_rule(f"/{_spec.endpoint}", view_func=_make_point_handler(_spec), methods=["POST", "OPTIONS"])
    app.add_url_rule(
        f"/{_spec.national_endpoint}",
        view_func=_make_national_handler(_spec),
        methods=["GET", "POST", "OPTIONS"],
    )


# --- 3. Area Analysis Route (drawn shape / coordinates / bbox) ---
@app.route('/analyze', methods=['POST', 'OPTIONS'])
def analyze_area():
    if request.method == 'OPTIONS':
        return jsonify({"status": "ok"}), 200
    try:
        data = _json_body() or {}
        spec = resolve_parameter(data.get("parameter"))
        start_year, end_year = parse_date_range(data)

        form = AreaSelectionForm(GeoJSONMapControl())
        shape = form.resolve(data.get("selection"))
        lat, lon = form.analysis_target(shape)
        ensure_inside_pakistan(lat, lon)

        result = IndicatorService.analyze_location(spec, lat, lon, start_year, end_year)
        result["parameter"] = spec.id
        result["geometry"] = shape.geometry
        result["geometryType"] = shape.kind
        result["target"] = {"lat": lat, "lon": lon}
        return jsonify(result)

    except EnviroSenseError as e:
        return _error_response(e)
    except Exception as e:
        logger.exception(f"Area analysis error: {e}")
        return jsonify({"error": str(e)}), 500


# --- 4. Export Route ---
@app.route('/export', methods=['POST', 'OPTIONS'])
def export_route():
    if request.method == 'OPTIONS':
        return jsonify({}), 200
    try:
        data = _json_body()
        if not data:
            return jsonify({"error": "No data received"}), 400

        buffer, filename, mimetype = export_analysis(data.get("format"), data)
        return send_file(buffer, as_attachment=True, download_name=filename, mimetype=mimetype)

    except EnviroSenseError as e:
        return _error_response(e)
    except Exception as e:
        logger.exception("Internal Export Error")
        return jsonify({"error": str(e)}), 500


# --- 5. Profile Routes ---
@app.route('/profile', methods=['GET', 'PUT', 'OPTIONS'])
def profile_route():
    if request.method == 'OPTIONS':
        return jsonify({}), 200
    try:
        user_id = _current_user()
        if request.method == 'PUT':
            data = HISTORY_STORE.upsert_profile(user_id, _json_body())
        else:
            data = HISTORY_STORE.get_profile(user_id)
        return jsonify({"success": True, "data": data})

    except EnviroSenseError as e:
        return _error_response(e)
    except Exception as e:
        logger.exception(f"Profile error: {e}")
        return jsonify({"error": str(e)}), 500


# --- 6. Analysis History Routes ---
@app.route('/analysis-history', methods=['GET', 'POST', 'OPTIONS'])
def analysis_history_route():
    if request.method == 'OPTIONS':
        return jsonify({}), 200
    try:
        user_id = _current_user()
        if request.method == 'POST':
            saved = HISTORY_STORE.save_analysis(user_id, _json_body())
            return jsonify({"success": True, "data": saved}), 201
        return jsonify({"success": True, "data": HISTORY_STORE.list_analyses(user_id)})

    except EnviroSenseError as e:
        return _error_response(e)
    except Exception as e:
        logger.exception(f"Analysis history error: {e}")
        return jsonify({"error": str(e)}), 500


@app.route('/analysis-history/<analysis_id>', methods=['DELETE', 'OPTIONS'])
def delete_analysis_route(analysis_id):
    if request.method == 'OPTIONS':
        return jsonify({}), 200
    try:
        deleted = HISTORY_STORE.delete_analysis(_current_user(), analysis_id)
        if not deleted:
            raise NotFoundError("Analysis not found.")
        return jsonify({"success": True})

    except EnviroSenseError as e:
        return _error_response(e)
    except Exception as e:
        logger.exception(f"Delete analysis error: {e}")
        return jsonify({"error": str(e)}), 500


if __name__ == "__main__":
    port = int(os.environ.get("PORT", config.PORT))
    app.run(debug=False, host="0.0.0.0", port=port, threaded=True)
