import io
import os

from flask import Flask, request, send_file
from flask import jsonify
from werkzeug.exceptions import RequestEntityTooLarge
from werkzeug.utils import secure_filename

from hexcrypt.config import web_settings
from hexcrypt.decoder import decode_image_bytes
from hexcrypt.encoder import encode_bytes
from hexcrypt.errors import HexCryptError


app = Flask(__name__)
app.config.update(web_settings())

TRUTHY = ('1', 'true', 'on', 'yes')


def _error(message, status):
    return jsonify(error=message), status


@app.errorhandler(HexCryptError)
def handle_hexcrypt_error(e):
    app.logger.warning("Request failed: %s", e)
    return jsonify(error=str(e), kind=type(e).__name__), 422


@app.errorhandler(RequestEntityTooLarge)
def handle_too_large(e):
    return _error(f"Upload exceeds {app.config['MAX_CONTENT_LENGTH']} bytes.", 413)


@app.route('/')
def index():
    return jsonify(
        name='hexcrypt',
        endpoints={
            'POST /encode': "text_file or text_data, optional size (WxH) and keep_tail -> PNG",
            'POST /decode': "encoded_image -> {decoded_text}",
        },
    )


@app.route('/encode', methods=['POST'])
def encode():
    text_file = request.files.get('text_file')
    text_data = request.form.get('text_data')
    size = request.form.get('size') or app.config.get('DEFAULT_SIZE')
    keep_tail = request.form.get('keep_tail', '').lower() in TRUTHY

    if text_file and text_file.filename:
        data = text_file.read()
        try:
            data.decode('utf-8')
        except UnicodeDecodeError:
            return _error('Uploaded text file is not valid UTF-8.', 400)
        stem = os.path.splitext(secure_filename(text_file.filename))[0] or 'encoded'
    elif text_data:
        data = text_data.encode('utf-8')
        stem = 'encoded'
    else:
        return _error('Please provide text or a text file to encode.', 400)

    image = encode_bytes(data, size, keep_tail)
    app.logger.info("Encoded %d byte(s) into %dx%d", len(data), image.width, image.height)

    buffer = io.BytesIO()
    image.save(buffer, 'PNG')
    buffer.seek(0)
    return send_file(buffer, mimetype='image/png', as_attachment=True, download_name=stem + '.png')


@app.route('/decode', methods=['POST'])
def decode():
    encoded_image = request.files.get('encoded_image')

    if encoded_image is None or encoded_image.filename == '':
        return _error('No image selected.', 400)

    text = decode_image_bytes(encoded_image.read())
    app.logger.info("Decoded %d character(s) from %s", len(text), secure_filename(encoded_image.filename))
    return jsonify(decoded_text=text)


if __name__ == '__main__':
    app.run(debug=True)
