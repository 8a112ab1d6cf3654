{
    'dataset_loader_train': {
        '__factory__': 'bayespipe.dataset.Arff',
        'path': 'weather.arff',
    },

    'dataset_loader_test': {
        '__copy__': 'dataset_loader_train',
    },

    'dataset_loader_unknown': {
        '__factory__': 'bayespipe.dataset.Arff',
        'path': 'unknown_weather.arff',
        'class_index': 'play',
    },

    'model': {
        '__factory__': 'bayespipe.model.NaiveBayes',
        'use_supervised_discretization': True,
    },

    'model_persister': {
        '__factory__': 'bayespipe.persistence.File',
        'path': 'naiveBayes.model',
    },

    'scoring': 'accuracy',

    'logging': {
        'version': 1,
        'formatters': {
            'simple': {
                'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'simple',
                'level': 'INFO',
            },
        },
        'loggers': {
            'bayespipe': {
                'handlers': ['console'],
                'level': 'INFO',
            },
        },
    },
}
