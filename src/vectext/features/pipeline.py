from typing import Any, Dict, List, Optional

from vectext.features.steps import FeatureStep, get_step
from vectext.utils.config_loader import ConfigLoader


class FeaturePipeline:
    """
    Pipeline for generating features from a corpus file using a chain of steps.
    """

    def __init__(self, steps: List[FeatureStep]):
        self.steps = steps
        self.context: Dict[str, Any] = {}

    def run(self, initial_data: Any) -> Any:
        """
        Run the pipeline steps in sequence.
        """
        data = initial_data
        self.context = {}

        for step in self.steps:
            data = step.execute(data, self.context)

        return data


def create_feature_pipeline(config: Dict[str, Any], save: bool = True) -> FeaturePipeline:
    """
    Factory function to create a FeaturePipeline from configuration.
    """
    steps = [
        get_step('load_corpus', config.get('corpus', {})),
        get_step('vectorize', config.get('vectorizer', {})),
    ]
    if save:
        steps.append(get_step('save', config.get('storage', {})))

    return FeaturePipeline(steps)


def run_feature_pipeline(input_path: str, config_dir: Optional[str] = None) -> Any:
    """Helper function to run the pipeline using the configs in `config_dir`."""
    features_config = ConfigLoader(config_dir).load("features")

    if not features_config:
        raise ValueError("Features configuration not found")

    pipeline = create_feature_pipeline(features_config)
    return pipeline.run(input_path)
