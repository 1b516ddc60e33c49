import numpy as np
import pytest

FIVE_POINTS = [[1.0, 1.0], [2.0, 1.0], [1.0, 2.0], [2.0, 2.0], [5.0, 8.0]]


def test_sos_detector_fit_sets_scores_threshold_and_labels() -> None:
    from pysos.models import StochasticOutlierSelection

    det = StochasticOutlierSelection(perplexity=3.0, contamination=0.2)
    fitted = det.fit(FIVE_POINTS)

    assert fitted is det
    assert det.decision_scores_.shape == (5,)
    assert det.decision_scores_[4] == pytest.approx(0.99227799024537555184, abs=1e-8)
    assert det.labels_.tolist() == [0, 0, 0, 0, 1]
    assert 0.279 < det.threshold_ < det.decision_scores_[4]


def test_sos_detector_scores_batches_transductively() -> None:
    from pysos.core.pipeline import perform_outlier_detection
    from pysos.models import StochasticOutlierSelection

    rng = np.random.RandomState(0)
    train = rng.normal(size=(20, 3))
    batch = np.vstack([rng.normal(size=(9, 3)), [[8.0, 8.0, 8.0]]])

    det = StochasticOutlierSelection(perplexity=4.0).fit(train)
    scores = det.decision_function(batch)

    np.testing.assert_allclose(scores, perform_outlier_detection(batch, 4.0))
    preds = det.predict(batch)
    assert preds.shape == (10,)
    assert preds[-1] == 1


def test_sos_detector_predict_proba_raw_uses_scores() -> None:
    from pysos.models import StochasticOutlierSelection

    det = StochasticOutlierSelection(perplexity=3.0).fit(FIVE_POINTS)

    for method in ("raw", "linear", "unify"):
        probs = det.predict_proba(FIVE_POINTS, method=method)
        assert probs.shape == (5, 2)
        np.testing.assert_allclose(probs.sum(axis=1), 1.0)
        assert np.all((probs >= 0.0) & (probs <= 1.0))

    raw = det.predict_proba(FIVE_POINTS, method="raw")
    np.testing.assert_allclose(raw[:, 1], det.decision_scores_)

    with pytest.raises(ValueError, match="not a valid"):
        det.predict_proba(FIVE_POINTS, method="softmax")


def test_sos_detector_requires_fit_before_scoring() -> None:
    from pysos.models import StochasticOutlierSelection

    det = StochasticOutlierSelection(perplexity=3.0)
    with pytest.raises(RuntimeError, match="fitted"):
        det.decision_function(FIVE_POINTS)
    with pytest.raises(RuntimeError, match="fitted"):
        det.predict(FIVE_POINTS)


def test_sos_detector_rejects_perplexity_too_large_for_data() -> None:
    from pysos.models import StochasticOutlierSelection

    det = StochasticOutlierSelection(perplexity=30.0)
    with pytest.raises(ValueError, match="perplexity"):
        det.fit(FIVE_POINTS)


def test_sos_detector_validates_constructor_arguments() -> None:
    from pysos.models import StochasticOutlierSelection

    with pytest.raises(ValueError, match="perplexity"):
        StochasticOutlierSelection(perplexity=0.5)
    with pytest.raises(ValueError, match="contamination"):
        StochasticOutlierSelection(contamination=0.9)
    with pytest.raises(TypeError):
        StochasticOutlierSelection(max_iterations="many")


def test_sos_detector_from_config() -> None:
    from pysos.config import SOSConfig
    from pysos.models import StochasticOutlierSelection

    cfg = SOSConfig(perplexity=3.0, max_iterations=100, contamination=0.2, squared=True)
    det = StochasticOutlierSelection.from_config(cfg)

    params = det.get_params()
    assert params["perplexity"] == 3.0
    assert params["max_iterations"] == 100
    assert params["contamination"] == 0.2
    assert params["squared"] is True


def test_sos_is_registered() -> None:
    from pysos.models import StochasticOutlierSelection, create_model, list_models

    assert "sos" in list_models()
    assert "sos" in list_models(tags=["probabilistic"])
    assert list_models(tags=["probabilistic", "deep"]) == []

    det = create_model("sos", perplexity=3.0)
    assert isinstance(det, StochasticOutlierSelection)

    with pytest.raises(KeyError, match="Unknown detector .lof.*Registered detectors: .*sos"):
        create_model("lof")
