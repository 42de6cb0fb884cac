from abc import ABC, abstractmethod
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd
from scipy import sparse

from vectext.features.vectorizer import create_vectorizer


class FeatureStep(ABC):
    """Abstract base class for feature generation steps."""

    @abstractmethod
    def execute(self, data: Any, context: Dict[str, Any]) -> Any:
        """
        Execute the step.

        Args:
            data: The input data for this step.
            context: A dictionary to share state/metadata between steps.

        Returns:
            The transformed data to be passed to the next step.
        """
        pass


class LoadCorpusStep(FeatureStep):
    """Step to load a corpus: one document per line (.txt) or a text column (.csv/.parquet)."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}
        self.text_column = self.config.get('text_column', 'text')

    def execute(self, input_path: str, context: Dict[str, Any]) -> List[str]:
        path = Path(input_path)
        print(f"Loading corpus from {path}...")
        if not path.exists():
            raise FileNotFoundError(f"Input file not found: {path}")

        if path.suffix == '.txt':
            with open(path, 'r', encoding='utf-8') as f:
                documents = [line.rstrip('\n') for line in f if line.strip()]
        else:
            if path.suffix == '.parquet':
                df = pd.read_parquet(path)
            elif path.suffix == '.csv':
                df = pd.read_csv(path)
            else:
                raise ValueError(f"Unsupported file format: {path.suffix}")

            if self.text_column not in df.columns:
                raise ValueError(f"Input data missing '{self.text_column}' column")
            documents = df[self.text_column].fillna('').astype(str).tolist()

        print(f"  Loaded {len(documents)} documents")

        context['input_path'] = str(path)
        context['num_documents'] = len(documents)
        return documents


class VectorizationStep(FeatureStep):
    """Step to vectorize text data."""

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.vectorizer = create_vectorizer(
            config.get('type', 'tfidf'),
            preprocessor=config.get('preprocessor', 'lowercase'),
            tokenizer=config.get('tokenizer', 'whitespace'),
            **config.get('params', {})
        )

    def execute(self, documents: List[str], context: Dict[str, Any]) -> sparse.csr_matrix:
        print("Fitting and transforming vectorizer...")
        feature_matrix = self.vectorizer.fit_transform(documents)

        print(f"Generated feature matrix with shape: {feature_matrix.shape}")
        print(f"  Vocabulary size: {len(self.vectorizer.vocabulary)}, pruned terms: {len(self.vectorizer.pruned_terms)}")

        context['vectorizer'] = self.vectorizer
        context['vectorizer_config'] = self.config

        return feature_matrix


class SaveFeaturesStep(FeatureStep):
    """Step to save the feature matrix, its vocabulary and metadata."""

    def __init__(self, config: Dict[str, Any]):
        self.output_dir = Path(config.get('output_dir', 'data/features'))
        self.name = config.get('name', 'features')

    def execute(self, matrix, context: Dict[str, Any]):
        vectorizer = context.get('vectorizer')
        if not vectorizer:
            raise ValueError("Vectorizer not found in context. Ensure VectorizationStep has run.")

        print(f"Saving features to {self.output_dir}...")
        self.output_dir.mkdir(parents=True, exist_ok=True)

        sparse.save_npz(self.output_dir / f"{self.name}_matrix.npz", sparse.csr_matrix(matrix))

        with open(self.output_dir / f"{self.name}_vocabulary.json", 'w', encoding='utf-8') as f:
            json.dump(vectorizer.vocabulary, f, ensure_ascii=False, indent=2)

        params = vectorizer.config
        params.pop('vocabulary', None)
        metadata = {
            'input_path': context.get('input_path'),
            'num_documents': context.get('num_documents'),
            'vectorizer_type': context.get('vectorizer_config', {}).get('type'),
            'vectorizer_params': params,
            'shape': list(matrix.shape),
            'pruned_terms': sorted(vectorizer.pruned_terms),
        }
        with open(self.output_dir / f"{self.name}_metadata.json", 'w', encoding='utf-8') as f:
            json.dump(metadata, f, ensure_ascii=False, indent=2)

        print("Feature generation completed successfully.")
        context['output_dir'] = str(self.output_dir)
        return matrix


def get_step(step_type: str, config: Dict[str, Any]) -> FeatureStep:
    """Factory method to create steps."""
    if step_type == 'load_corpus':
        return LoadCorpusStep(config)
    elif step_type == 'vectorize':
        return VectorizationStep(config)
    elif step_type == 'save':
        return SaveFeaturesStep(config)
    else:
        raise ValueError(f"Unknown step type: {step_type}")
