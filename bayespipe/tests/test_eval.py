from unittest.mock import Mock

import pytest


class TestTest:
    @pytest.fixture
    def test(self):
        from bayespipe.eval import test
        return test

    def test_test(self, test, weather_nominal):
        dataset_loader_test, model_persister = Mock(), Mock()
        dataset_loader_test.return_value = weather_nominal
        model = model_persister.read.return_value
        model.score.return_value = 0.75

        scores = test(dataset_loader_test, model_persister)

        dataset_loader_test.assert_called_with()
        model_persister.read.assert_called_with()
        assert model.score.call_count == 1
        assert scores == ['score: 0.75']

    def test_test_no_score(self, test, weather_nominal):
        model_persister = Mock()
        model_persister.read.return_value = Mock(spec=['fit', 'predict'])

        with pytest.raises(ValueError):
            test(Mock(return_value=weather_nominal), model_persister)

    def test_scoring_dict(self, test, weather_nominal):
        model_persister = Mock()
        scoring = {'AUC': Mock(), 'accuracy': Mock()}
        scoring['AUC'].return_value = 1.23
        scoring['accuracy'].return_value = 3.45
        model = model_persister.read.return_value

        scores = test(Mock(return_value=weather_nominal), model_persister,
                      scoring=scoring)

        assert scores == ['AUC: 1.23', 'accuracy: 3.45']
        assert model.score.call_count == 0

    def test_skips_rows_without_class(self, test, weather_nominal):
        model_persister = Mock()
        model = model_persister.read.return_value
        dataset = weather_nominal.with_class_values(
            [None] * 4 + weather_nominal.y.tolist()[4:])

        test(Mock(return_value=dataset), model_persister)

        X, y = model.score.call_args[0]
        assert len(X) == len(y) == 10

    def test_accuracy(self, test, weather_nominal, tmpdir):
        from bayespipe.fit import train
        from bayespipe.persistence import File

        persister = File(str(tmpdir.join('naiveBayes.model')))
        persister.write(train(weather_nominal))
        scores = test(Mock(return_value=weather_nominal), persister,
                      scoring='accuracy')
        assert scores[0].startswith('score: ')
        assert 0.7 < float(scores[0].split(': ')[1]) <= 1.0
