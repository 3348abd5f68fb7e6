# backend/app.py
from typing import Union

import structlog
from flask import Flask, request, jsonify
from flask_cors import CORS
from pydantic import BaseModel, ValidationError, field_validator

from amounts import clamp_participant_count, format_cents, parse_amount
from logging_setup import configure_logging
from settings import get_settings
from settlement import Participant, balances, fair_shares, settle, truncating_divmod

configure_logging(get_settings())
logger = structlog.get_logger(__name__)

app = Flask(__name__)
CORS(app)  # This allows the React frontend to talk to this backend


class ParticipantIn(BaseModel):
    """One row of the input form: a name and the amount as typed."""

    name: str = ""
    amount: str = ""

    @field_validator('name', mode='before')
    @classmethod
    def name_as_text(cls, v):
        return "" if v is None else str(v).strip()

    @field_validator('amount', mode='before')
    @classmethod
    def amount_as_text(cls, v: Union[str, int, float, None]) -> str:
        if v is None:
            return ""
        if not isinstance(v, (str, int, float)):
            raise ValueError("amount must be text or a number")
        return str(v)


class CalculateRequest(BaseModel):
    participants: list[ParticipantIn]


def default_name(index):
    return f"Person {index + 1}"


def payment_sentence(from_name, to_name, amount):
    return f"{from_name} owes {to_name} {amount}"


def build_report(entries, currency):
    """Run the settlement for the submitted rows and resolve IDs back to names."""
    names = {}
    participants = []
    for index, entry in enumerate(entries):
        names[index] = entry.name or default_name(index)
        participants.append(Participant(index, parse_amount(entry.amount)))

    shares = fair_shares(participants)
    net = balances(participants)
    payments = settle(participants)

    total = sum(p.paid for p in participants)
    average = truncating_divmod(total, len(participants))[0] if participants else 0

    rows = []
    for p, share, balance in zip(participants, shares, net):
        rows.append({
            "id": p.id,
            "name": names[p.id],
            "paid": p.paid,
            "paid_display": format_cents(p.paid, currency),
            "share": share,
            "share_display": format_cents(share, currency),
            "balance": balance['amount'],
            "balance_display": format_cents(balance['amount'], currency),
        })

    transfers = []
    for payment in payments:
        display = format_cents(payment.amount, currency)
        from_name = names[payment.from_id]
        to_name = names[payment.to_id]
        transfers.append({
            "from_id": payment.from_id,
            "to_id": payment.to_id,
            "from_name": from_name,
            "to_name": to_name,
            "amount": payment.amount,
            "display": display,
            "text": payment_sentence(from_name, to_name, display),
        })

    return {
        "participants": rows,
        "summary": {
            "count": len(participants),
            "total": total,
            "total_display": format_cents(total, currency),
            "average": average,
            "average_display": format_cents(average, currency),
        },
        "payments": transfers,
    }


# --- 1. HEALTH CHECK ROUTE ---
@app.route('/api', methods=['GET'])
def health_check():
    return jsonify({"status": "healthy", "message": "Backend is running!"})


# --- 2. DEFAULT ROSTER ---
@app.route('/api/participants', methods=['GET'])
def participants_template():
    settings = get_settings()
    requested = request.args.get('count', settings.default_participant_count)
    count = clamp_participant_count(requested, settings.max_participants)

    roster = [
        {"id": i, "name": default_name(i), "amount": format_cents(0)}
        for i in range(count)
    ]
    return jsonify({"count": count, "participants": roster})


# --- 3. CALCULATION ROUTE ---
@app.route('/api/calculate', methods=['POST'])
def calculate():
    settings = get_settings()
    data = request.get_json(silent=True)
    if data is None:
        return jsonify({"error": "Request body must be JSON"}), 400

    # Clients may post a bare list of rows
    if isinstance(data, list):
        data = {"participants": data}

    try:
        body = CalculateRequest.model_validate(data)
    except ValidationError as e:
        logger.info("calculate_rejected", errors=e.error_count())
        details = e.errors(include_url=False, include_context=False, include_input=False)
        return jsonify({"error": "Invalid request", "details": details}), 400

    if len(body.participants) > settings.max_participants:
        return jsonify({
            "error": f"At most {settings.max_participants} participants are allowed"
        }), 400

    try:
        report = build_report(body.participants, settings.currency_symbol or None)
    except Exception as e:
        logger.exception("calculate_failed")
        return jsonify({"error": str(e)}), 500

    logger.info(
        "settlement_calculated",
        participants=report["summary"]["count"],
        payments=len(report["payments"]),
    )
    return jsonify(report)


if __name__ == '__main__':
    settings = get_settings()
    app.run(debug=settings.debug, host=settings.host, port=settings.port)
