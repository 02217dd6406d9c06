from flask import Flask, jsonify, request
from phrasemeter.config import load_config
from phrasemeter.errors import InvalidPhrase
from phrasemeter.evaluator import score_phrase
from phrasemeter.resources import load_resources

app = Flask(__name__)

CFG = load_config()
RESOURCES = load_resources(CFG)

@app.route('/')
def home():
    return jsonify({
        "message": "phrasemeter API is running",
        "quotes_indexed": len(RESOURCES.index) if RESOURCES.index is not None else 0,
        "templates": len(RESOURCES.templates),
    })

@app.route('/score', methods=['POST'])
def score_route():
    data = request.get_json(silent=True) or {}
    phrase = data.get('phrase', '')
    if not isinstance(phrase, str):
        return jsonify({'error': "'phrase' must be a string"}), 400
    try:
        result = score_phrase(
            phrase,
            word_pool_size=int(data.get('word_pool_size', CFG['word_pool_size'])),
            penalty=data.get('penalty'),
            offline_rate=float(CFG['offline_rate']),
            online_rate=float(CFG['online_rate']),
            templates=RESOURCES.templates,
            index=RESOURCES.index,
            flair=RESOURCES.flair,
            quote_threshold=float(CFG['quote_threshold']),
        )
    except (InvalidPhrase, ValueError, TypeError) as e:
        return jsonify({'error': str(e)}), 400
    return jsonify(result.to_dict())

if __name__ == "__main__":
    app.run(debug=True)
