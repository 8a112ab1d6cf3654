from io import StringIO
from unittest.mock import Mock

import pytest


class TestClassifierPipeline:
    @pytest.fixture
    def pipeline(self, weather_nominal_path, weather_unknown_path, tmpdir):
        from bayespipe.dataset import Arff
        from bayespipe.persistence import File
        from bayespipe.pipeline import ClassifierPipeline

        return ClassifierPipeline(
            dataset_loader_train=Arff(weather_nominal_path),
            dataset_loader_unknown=Arff(weather_unknown_path),
            model_persister=File(str(tmpdir.join('naiveBayes.model'))),
            file=StringIO(),
            )

    def test_run(self, pipeline, tmpdir):
        labeled = pipeline.run()

        assert pipeline.state == 'idle'
        assert labeled.num_instances == 3
        assert labeled.y.notna().all()
        assert tmpdir.join('naiveBayes.model').check()

        lines = pipeline.file.getvalue().splitlines()
        assert lines[5] == 'class index = 4'
        assert lines[6] == 'instance = sunny,hot,high,FALSE,no'
        assert len([l for l in lines if l.startswith('instance = ')]) == 5
        assert ' unclassified unknownInstances = ' in lines
        assert ' New, labeled = ' in lines
        assert lines[-3:] == [labeled.instance(i) for i in range(3)]

    def test_steps(self, pipeline):
        assert pipeline.load().num_instances == 14
        assert pipeline.state == 'loaded'
        model = pipeline.train()
        assert pipeline.state == 'trained'
        pipeline.persist()
        assert pipeline.state == 'persisted'
        reloaded = pipeline.reload()
        assert pipeline.state == 'reloaded'
        assert reloaded is not model
        labeled = pipeline.classify()
        assert pipeline.state == 'classified'
        assert labeled.y.tolist() == (
            model.predict(labeled.X).tolist())

    def test_reloaded_model_classifies(self, pipeline):
        pipeline.load()
        pipeline.train()
        pipeline.persist()
        pipeline.reload()
        pipeline.model = Mock()
        labeled = pipeline.classify()
        assert pipeline.model.predict.call_count == 0
        assert labeled.y.notna().all()

    def test_out_of_order(self, pipeline):
        with pytest.raises(RuntimeError):
            pipeline.train()
        pipeline.load()
        with pytest.raises(RuntimeError):
            pipeline.persist()
        with pytest.raises(RuntimeError):
            pipeline.load()
        assert pipeline.state == 'loaded'

    def test_load_failure(self, tmpdir):
        from bayespipe.dataset import Arff
        from bayespipe.interfaces import FileReadError
        from bayespipe.pipeline import ClassifierPipeline

        persister = Mock()
        pipeline = ClassifierPipeline(
            Arff(str(tmpdir.join('nothere.arff'))), Mock(), persister)
        with pytest.raises(FileReadError):
            pipeline.run()
        assert pipeline.state == 'idle'
        assert pipeline.dataset is None
        assert persister.write.call_count == 0

    def test_storage_failure(self, weather_nominal_path, tmpdir):
        from bayespipe.dataset import Arff
        from bayespipe.interfaces import StorageError
        from bayespipe.persistence import File
        from bayespipe.pipeline import ClassifierPipeline

        unknown = Mock()
        pipeline = ClassifierPipeline(
            Arff(weather_nominal_path), unknown,
            File(str(tmpdir.join('nodir', 'naiveBayes.model'))),
            file=StringIO(),
            )
        with pytest.raises(StorageError):
            pipeline.run()
        assert pipeline.state == 'trained'
        assert unknown.call_count == 0


def test_run_from_config(config, weather_nominal_path, weather_unknown_path,
                         tmpdir, capsys):
    from bayespipe.dataset import Arff
    from bayespipe.model import NaiveBayes
    from bayespipe.persistence import File
    from bayespipe.pipeline import run

    config.update({
        'dataset_loader_train': Arff(weather_nominal_path),
        'dataset_loader_unknown': Arff(weather_unknown_path),
        'model_persister': File(str(tmpdir.join('naiveBayes.model'))),
        'model': NaiveBayes(use_supervised_discretization=False),
        })
    config.initialized = True

    labeled = run()

    assert labeled.num_instances == 3
    assert 'New, labeled' in capsys.readouterr().out


def test_run_numeric_class(weather_numeric_path, tmpdir):
    from bayespipe.dataset import Arff
    from bayespipe.interfaces import TrainingError
    from bayespipe.persistence import File
    from bayespipe.pipeline import run

    unknown = Mock()
    with pytest.raises(TrainingError):
        run(Arff(weather_numeric_path, class_index='humidity'), unknown,
            File(str(tmpdir.join('naiveBayes.model'))))
    assert unknown.call_count == 0
