from collections import namedtuple
from io import BytesIO

from flask import (
    Flask, abort, g, jsonify, redirect, render_template, request, send_file,
    session, url_for,
)

import db
import helpers
from config import CURRENCY_SYMBOL, DEFAULT_INPUTS, SECRET_KEY
from errors import CalculatorError
from export import EXPORT_FILENAME, build_workbook
from storage import SavedCalculations, default_name
from validation import normalize_inputs, run_calculation

app = Flask(__name__)
app.secret_key = SECRET_KEY

# What the calculator page shows: current inputs, last good result, error.
CalculatorView = namedtuple("CalculatorView", ["inputs", "result", "error"])


def saved_calculations():
    """The saved collection, read from the store once per request."""
    if "saved" not in g:
        g.saved = SavedCalculations(db.SqliteStore())
    return g.saved


def parse_json(required_fields=None):
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None, (jsonify({"ok": False, "error": "Invalid JSON payload"}), 400)

    if required_fields:
        missing = [f for f in required_fields if f not in data]
        if missing:
            return None, (
                jsonify({"ok": False, "error": f"Missing required field(s): {', '.join(missing)}"}),
                400,
            )
    return data, None


def last_result():
    """Recompute the last successful calculation kept in the session."""
    inputs = session.get("last_inputs")
    if not inputs:
        return None, None
    try:
        return inputs, run_calculation(inputs)
    except CalculatorError:
        session.pop("last_inputs", None)
        return None, None


@app.context_processor
def inject_globals():
    return {
        "CURRENCY_SYMBOL": CURRENCY_SYMBOL,
        "saved_count": len(saved_calculations()),
    }


# ── Calculator ──

@app.route("/")
def calculator_page():
    inputs, result = last_result()
    view = CalculatorView(inputs or dict(DEFAULT_INPUTS), result, None)
    return render_template("calculator.html", view=view)


@app.route("/", methods=["POST"])
def calculator_submit():
    inputs = normalize_inputs(request.form)
    try:
        result = run_calculation(inputs)
    except CalculatorError as exc:
        # Prior result stays on screen next to the error.
        _, prior = last_result()
        view = CalculatorView(inputs, prior, str(exc))
        return render_template("calculator.html", view=view), 400

    session["last_inputs"] = inputs
    return render_template("calculator.html", view=CalculatorView(inputs, result, None))


# ── Saved calculations (pages) ──

@app.route("/saved")
def saved_page():
    return render_template("saved.html", calculations=saved_calculations().all())


@app.route("/saved", methods=["POST"])
def save_from_form():
    inputs = normalize_inputs(request.form)
    try:
        result = run_calculation(inputs)
    except CalculatorError as exc:
        _, prior = last_result()
        return render_template("calculator.html", view=CalculatorView(inputs, prior, str(exc))), 400

    name = (request.form.get("name") or "").strip() or default_name()
    saved_calculations().add(inputs, result, name)
    return redirect(url_for("saved_page"))


@app.route("/saved/<calc_id>")
def load_saved(calc_id):
    calc = saved_calculations().get(calc_id)
    if calc is None:
        abort(404)
    session["last_inputs"] = calc.inputs
    return render_template("calculator.html", view=CalculatorView(calc.inputs, calc.result, None))


@app.route("/saved/<calc_id>/delete", methods=["POST"])
def delete_saved_from_form(calc_id):
    if not saved_calculations().delete(calc_id):
        abort(404)
    return redirect(url_for("saved_page"))


# ── Help pages ──

@app.route("/getting-started")
def getting_started_page():
    return render_template("getting_started.html")


@app.route("/about")
def about_page():
    return render_template("about.html")


# ── API Endpoints ──

@app.route("/api/calculate", methods=["POST"])
def api_calculate():
    data, err = parse_json()
    if err:
        return err
    try:
        result = run_calculation(normalize_inputs(data))
    except CalculatorError as exc:
        return jsonify({"ok": False, "error": str(exc)}), 400
    return jsonify({"ok": True, "result": result.to_dict()})


@app.route("/api/saved")
def api_list_saved():
    return jsonify([c.to_dict() for c in saved_calculations().all()])


@app.route("/api/saved", methods=["POST"])
def api_save():
    data, err = parse_json()
    if err:
        return err
    inputs = normalize_inputs(data)
    try:
        result = run_calculation(inputs)
    except CalculatorError as exc:
        return jsonify({"ok": False, "error": str(exc)}), 400

    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        name = default_name()
    calc = saved_calculations().add(inputs, result, name.strip())
    return jsonify({"ok": True, "id": calc.id})


@app.route("/api/saved/export")
def api_export_saved():
    wb = build_workbook(saved_calculations().all())
    buf = BytesIO()
    wb.save(buf)
    buf.seek(0)
    return send_file(
        buf,
        mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        as_attachment=True,
        download_name=EXPORT_FILENAME,
    )


@app.route("/api/saved/<calc_id>")
def api_get_saved(calc_id):
    calc = saved_calculations().get(calc_id)
    if calc is None:
        return jsonify({"ok": False, "error": "Not found"}), 404
    return jsonify(calc.to_dict())


@app.route("/api/saved/<calc_id>", methods=["DELETE"])
def api_delete_saved(calc_id):
    if not saved_calculations().delete(calc_id):
        return jsonify({"ok": False, "error": "Not found"}), 404
    return jsonify({"ok": True})


# ── Template Helpers ──

@app.template_filter("npr")
def npr_filter(value):
    try:
        return helpers.format_npr(float(value))
    except (ValueError, TypeError):
        return value


@app.template_filter("amount")
def amount_filter(value):
    try:
        return helpers.format_amount(float(value))
    except (ValueError, TypeError):
        return value


@app.template_filter("timestamp")
def timestamp_filter(value):
    try:
        return helpers.format_timestamp(int(value))
    except (ValueError, TypeError, OverflowError, OSError):
        return value


if __name__ == "__main__":
    db.init_db()
    app.run(debug=True, port=5001)
