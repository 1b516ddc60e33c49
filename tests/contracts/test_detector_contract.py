import numpy as np
import pytest


@pytest.mark.parametrize("model_name", ["sos"])
def test_detector_contract_fit_score_predict(model_name: str) -> None:
    from pysos.models.registry import create_model

    rng = np.random.RandomState(0)
    train = rng.normal(size=(16, 4))
    test = np.vstack([rng.normal(size=(7, 4)), [[10.0, 10.0, 10.0, 10.0]]])

    detector = create_model(model_name, contamination=0.1, perplexity=5.0)

    fitted = detector.fit(train)
    assert fitted is detector
    assert detector.decision_scores_.shape == (16,)
    assert detector.labels_.shape == (16,)

    scores = np.asarray(detector.decision_function(test), dtype=np.float64)
    assert scores.shape == (8,)
    assert np.isfinite(scores).all()
    assert np.all((scores >= 0.0) & (scores <= 1.0))

    preds = np.asarray(detector.predict(test), dtype=int)
    assert preds.shape == (8,)
    assert set(np.unique(preds)).issubset({0, 1})
