import logging
import os

from flask import Flask, jsonify, request
from flask_cors import CORS

from perceptron.cost import mse
from perceptron.datasets import input_arity
from perceptron.gradient import EPSILON
from perceptron.nn import Network
from perceptron.rng import RandomSource
from perceptron.training import LEARNING_RATE, train

app = Flask(__name__)
CORS(app)

# The trained model lives only in memory; nothing is written to disk.
_state = {"model": None, "samples": None}

MAX_ITERATIONS = 200_000


def reset_model():
    _state["model"] = None
    _state["samples"] = None


def error(message, code=400):
    return jsonify({"status": "error", "message": message}), code


def parse_samples(raw):
    """Turn [[[x1, x2, ...], y], ...] into a list of (inputs, expected) pairs."""
    if not isinstance(raw, list) or not raw:
        raise ValueError("samples must be a non-empty list of [inputs, expected] pairs")
    samples = []
    for item in raw:
        if not isinstance(item, (list, tuple)) or len(item) != 2:
            raise ValueError(f"malformed sample: {item!r}")
        x, y = item
        if not isinstance(x, (list, tuple)):
            raise ValueError("inputs must be a list of numbers")
        if isinstance(y, str):
            raise ValueError(f"expected output must be a number or a list of numbers: {y!r}")
        x = [float(v) for v in x]
        y = [float(v) for v in y] if isinstance(y, list) else float(y)
        samples.append((x, y))
    return samples


def build_network(payload, nin):
    layers = payload.get("layers", [1])
    if not isinstance(layers, list) or not layers:
        raise ValueError("layers must be a non-empty list of layer widths")
    kwargs = {"rng": RandomSource(payload.get("seed"))}
    activations = payload.get("activations")
    if isinstance(activations, str):
        kwargs["hidden"] = kwargs["output"] = activations
    elif activations is not None:
        kwargs["activations"] = activations
    else:
        kwargs["hidden"] = payload.get("hidden", "relu")
        kwargs["output"] = payload.get("output", "identity")
    return Network(nin, [int(n) for n in layers], **kwargs)


def describe_model(model):
    return {
        "layout": model.layout(),
        "activations": model.activations(),
        "parameters": model.parameters(),
    }


@app.route("/api/status", methods=["GET"])
def status():
    """Return current model status."""
    model = _state["model"]
    if model is None:
        return jsonify({"model_loaded": False, "layout": None, "cost": None})
    return jsonify(
        {
            "model_loaded": True,
            "layout": model.layout(),
            "cost": mse(model, _state["samples"]),
        }
    )


@app.route("/api/train", methods=["POST"])
def train_model():
    """Build a network and train it on the posted samples."""
    try:
        payload = request.get_json(silent=True) or {}
        if not isinstance(payload, dict):
            return error("request body must be a JSON object")
        samples = parse_samples(payload.get("samples"))
        iterations = int(payload.get("iterations", 1000))
        if iterations > MAX_ITERATIONS:
            return error(f"iterations must not exceed {MAX_ITERATIONS}")

        model = build_network(payload, input_arity(samples))
        report = train(
            model,
            samples,
            learning_rate=float(payload.get("learning_rate", LEARNING_RATE)),
            iterations=iterations,
            epsilon=float(payload.get("epsilon", EPSILON)),
            method=payload.get("method", "forward"),
            update=payload.get("update", "snapshot"),
        )
        _state["model"] = model
        _state["samples"] = samples

        return jsonify(
            {
                "status": "success",
                "message": f"Training complete. Cost: {report.final_cost:.6f}",
                "initial_cost": report.initial_cost,
                "final_cost": report.final_cost,
                "history": report.history,
                **describe_model(model),
            }
        )

    except (ValueError, TypeError) as exc:
        return error(str(exc))
    except Exception:
        logging.exception("Error while training model")
        return error("An internal error occurred while training the model.", 500)


@app.route("/api/infer", methods=["POST"])
def infer():
    """Run the current model on provided inputs."""
    try:
        model = _state["model"]
        if model is None:
            return error("No model loaded")

        payload = request.get_json(silent=True) or {}
        if not isinstance(payload, dict):
            return error("request body must be a JSON object")
        inputs = payload.get("inputs")
        if not isinstance(inputs, list):
            return error("inputs must be a list of numbers")

        output = model([float(v) for v in inputs])
        return jsonify({"status": "success", "output": output})

    except (ValueError, TypeError) as exc:
        return error(str(exc))
    except Exception:
        logging.exception("Error while running inference")
        return error("An internal error occurred while running inference.", 500)


@app.route("/api/model", methods=["GET"])
def get_model_data():
    model = _state["model"]
    if model is None:
        return error("No model loaded")
    return jsonify({"status": "success", **describe_model(model)})


if __name__ == "__main__":
    debug = os.environ.get("FLASK_DEBUG", "0") == "1"
    app.run(debug=debug, port=5000, host="127.0.0.1")
