# -*- coding: utf-8 -*-
import pytest

from app import app
from qrcore import ErrorCorrectionLevel, build_layer, evaluate_all_masks, make_segments, pack_data_codewords


@pytest.fixture
def client():
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


def test_index_form(client):
    response = client.get('/')
    assert response.status_code == 200
    assert b'<form method="post">' in response.data
    assert b'<svg' not in response.data


def test_index_generates_symbol(client):
    response = client.post('/', data={
        'text': 'HELLO WORLD', 'ecc': 'L', 'version': 'auto', 'mask': 'auto', 'border': '4',
        'boost_error': 'true',
    })
    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert '<svg' in body
    assert '<?xml' not in body
    assert 'QUARTILE' in body
    assert '(21x21)' in body
    assert 'Mask penalties: 0:' in body
    assert '/export/png?' in body


def test_index_reports_errors(client):
    response = client.post('/', data={'text': 'a' * 3000, 'ecc': 'H'})
    assert response.status_code == 200
    assert b'Could not generate the QR code' in response.data

    response = client.post('/', data={'text': ''})
    assert b'Enter the text to encode.' in response.data


def test_export_png(client):
    response = client.get('/export/png?text=hello&ecc=M&border=2')
    assert response.status_code == 200
    assert response.mimetype == 'image/png'
    assert response.data.startswith(b'\x89PNG')
    assert 'qr.png' in response.headers['Content-Disposition']


def test_export_svg(client):
    response = client.get('/export/svg?text=hello&mask=3&version=2')
    assert response.status_code == 200
    assert response.mimetype == 'image/svg+xml'
    assert b'viewBox="0 0 33 33"' in response.data


def test_export_errors(client):
    assert client.get('/export/png').status_code == 400
    response = client.get('/export/svg?text=hello&mask=9')
    assert response.status_code == 400
    assert b'Invalid parameters' in response.data
    response = client.get('/export/svg?text=' + 'a' * 200 + '&version=1')
    assert response.status_code == 400
    assert b'Data too long' in response.data


def test_border_out_of_range_falls_back(client):
    response = client.get('/export/svg?text=hello&version=1&border=99')
    assert b'viewBox="0 0 29 29"' in response.data


def test_qr_fragment(client):
    response = client.get('/qr?text=hello')
    assert response.status_code == 200
    assert response.mimetype == 'text/html'
    body = response.get_data(as_text=True)
    assert body.startswith('<div>\n<svg ')
    assert body.endswith('</svg>\n</div>')

    assert client.get('/qr').get_data(as_text=True) == '<div>\n\n</div>'
    assert client.get('/qr?text=' + 'a' * 3000).status_code == 400


def test_index_lists_penalty_of_every_mask(client):
    response = client.post('/', data={'text': 'HELLO WORLD', 'ecc': 'M', 'boost_error': 'false'})
    body = response.get_data(as_text=True)
    data = pack_data_codewords(make_segments('HELLO WORLD'), 1, ErrorCorrectionLevel.MEDIUM)
    best_mask, _, scores = evaluate_all_masks(build_layer(1, ErrorCorrectionLevel.MEDIUM, data),
                                              ErrorCorrectionLevel.MEDIUM)
    expected = ", ".join(f"{k}:{v}" for k, v in sorted(scores.items()))
    assert f"Mask penalties: {expected}<br>" in body
    assert f"Mask: <strong>{best_mask}</strong>" in body
