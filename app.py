#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
qrcore - Flask Web Application

Encodes text typed into a form, shows the symbol with its version, error
correction level, applied mask and the penalty score of every mask, and
offers PNG/SVG downloads.

Run:
    python app.py
Open:
    http://127.0.0.1:5000/
"""

import logging
from io import BytesIO
from typing import Dict, Tuple

from flask import Flask, render_template_string, request, send_file

from qrcore import (
    DataTooLongError, build_layer, evaluate_all_masks, make_qr, make_segments, pack_data_codewords,
    to_png_bytes, to_svg,
)
from qrcore.constants import DEFAULT_BORDER

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

MAX_BORDER = 20

TEMPLATE = """
<!doctype html>
<html>
<head>
  <meta charset="utf-8">
  <title>qrcore</title>
  <style>
    body{font-family:Inter, Arial, sans-serif; padding:18px; background:#fff}
    .card{width:360px;border:1px solid #ddd;padding:10px;border-radius:8px}
    .metrics{font-size:12px;color:#333}
    .error{color:#b00;font-weight:600}
    input[type="text"]{font-family:monospace}
  </style>
</head>
<body>
  <h1>qrcore</h1>

  <form method="post">
    Text: <input type="text" name="text" size="90" value="{{text|e}}">
    ECC:
    <select name="ecc">
      {% for level in ['L', 'M', 'Q', 'H'] %}
      <option value="{{level}}" {% if ecc==level %}selected{% endif %}>{{level}}</option>
      {% endfor %}
    </select>
    Version: <input type="text" name="version" size="4" value="{{version}}">
    Mask: <input type="text" name="mask" size="4" value="{{mask}}">
    Border: <input type="text" name="border" size="3" value="{{border}}">
    <label><input type="checkbox" name="boost_error" value="true" {% if boost_error %}checked{% endif %}> Boost ECC</label>
    <button type="submit">Generate</button>
  </form>

  {% if error %}
    <p class="error">{{error}}</p>
  {% endif %}

  {% if qr %}
    <div class="card">
      {{ qr.svg|safe }}
      <div class="metrics">
        Version: <strong>{{qr.version}}</strong> ({{qr.size}}x{{qr.size}})<br>
        ECC: <strong>{{qr.ecc}}</strong><br>
        Mask: <strong>{{qr.mask}}</strong><br>
        Dark modules: {{qr.dark_modules}} / {{qr.modules}}<br>
        Mask penalties: {{qr.mask_scores_text}}<br>
        <a href="{{ url_for('export_png', **qr.params) }}">PNG</a> |
        <a href="{{ url_for('export_svg', **qr.params) }}">SVG</a>
      </div>
    </div>
  {% endif %}
</body>
</html>
"""


def _read_params(req) -> Tuple[str, str, str, str, bool, int]:
    """Extract QR generation parameters from a Flask request, with fallbacks."""
    text = (req.values.get('text') or "").strip()
    ecc = (req.values.get('ecc') or "M").strip().upper()
    version = (req.values.get('version') or "auto").strip()
    mask = (req.values.get('mask') or "auto").strip()
    boost_error = (req.values.get('boost_error') == 'true') if req.values.get('boost_error') is not None else False

    try:
        border = int(req.values.get('border') or DEFAULT_BORDER)
        if border < 0 or border > MAX_BORDER:
            border = DEFAULT_BORDER
    except (ValueError, TypeError):
        border = DEFAULT_BORDER

    return text, ecc, version, mask, boost_error, border


def _mask_scores(text, qr_symbol) -> Dict[int, int]:
    """Penalty score of every mask, evaluated on the symbol's unmasked layer."""
    version, ecc = qr_symbol.version, qr_symbol.error_correction
    data = pack_data_codewords(make_segments(text), version, ecc)
    _, _, scores = evaluate_all_masks(build_layer(version, ecc, data), ecc)
    return scores



app = Flask(__name__)


@app.route('/', methods=['GET', 'POST'])
def index():
    text, ecc, version, mask, boost_error, border = _read_params(request)
    if request.method == 'GET':
        boost_error = True

    qr_view = None
    error = None

    if request.method == 'POST':
        if not text:
            error = "Enter the text to encode."
        else:
            try:
                logger.info(f"Generating QR code with parameters: ecc={ecc}, version={version}, mask={mask}")
                qr_symbol = make_qr(text, ecc=ecc, version=version, mask=mask, boost_error=boost_error)
                logger.info(f"Successfully generated QR code version {qr_symbol.version}")
            except ValueError as ex:
                error = f"Could not generate the QR code with the chosen parameters: {ex}"
                logger.error(f"QR generation failed: {ex}")
                qr_symbol = None

            if qr_symbol:
                scores = _mask_scores(text, qr_symbol)
                scores_text = ", ".join(f"{k}:{v}" for k, v in sorted(scores.items()))
                matrix = qr_symbol.matrix
                qr_view = {
                    'version': qr_symbol.version,
                    'size': qr_symbol.size,
                    'ecc': qr_symbol.error_correction.name,
                    'mask': qr_symbol.mask,
                    'modules': qr_symbol.size ** 2,
                    'dark_modules': sum(sum(row) for row in matrix),
                    'svg': to_svg(qr_symbol, border=border, include_header=False),
                    'mask_scores_text': scores_text,
                    'params': {
                        'text': text, 'ecc': ecc, 'version': version, 'mask': mask,
                        'boost_error': 'true' if boost_error else 'false', 'border': border,
                    },
                }

    return render_template_string(
        TEMPLATE,
        text=text, ecc=ecc, version=version, mask=mask, boost_error=boost_error, border=border,
        qr=qr_view, error=error
    )


def _symbol_from_request():
    text, ecc, version, mask, boost_error, border = _read_params(request)
    if not text:
        return None, border, ("Missing text", 400)
    try:
        qr = make_qr(text, ecc=ecc, version=version, mask=mask, boost_error=boost_error)
    except DataTooLongError as ex:
        logger.warning(f"Data too long for export: {ex}")
        return None, border, (f"Data too long: {ex}", 400)
    except ValueError as ex:
        logger.warning(f"Invalid export parameters: {ex}")
        return None, border, (f"Invalid parameters: {ex}", 400)
    return qr, border, None


@app.route('/export/png', methods=['GET'])
def export_png():
    qr, border, failure = _symbol_from_request()
    if failure:
        return failure
    buf = BytesIO(to_png_bytes(qr, scale=10, border=border))
    return send_file(buf, as_attachment=True, download_name='qr.png', mimetype='image/png')


@app.route('/export/svg', methods=['GET'])
def export_svg():
    qr, border, failure = _symbol_from_request()
    if failure:
        return failure
    buf = BytesIO(to_svg(qr, border=border).encode('utf-8'))
    return send_file(buf, as_attachment=True, download_name='qr.svg', mimetype='image/svg+xml')


@app.route('/qr', methods=['GET'])
def qr_fragment():
    """HTML fragment with the inline SVG symbol of ``text`` at level L."""
    text = request.args.get('text') or ""
    body = ""
    if text:
        try:
            body = to_svg(make_qr(text, ecc='L'), include_header=False)
        except DataTooLongError as ex:
            logger.warning(f"Data too long: {ex}")
            return f"Data too long: {ex}", 400
    return f"<div>\n{body}\n</div>", 200, {'Content-Type': 'text/html; charset=UTF-8'}


if __name__ == "__main__":
    app.run(debug=True)
