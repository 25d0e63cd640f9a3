"""
Evaluation framework for trigram language identification.
"""
import logging
from collections import defaultdict
from typing import Dict, List, Optional

import numpy as np

from .utils import language_name

logger = logging.getLogger(__name__)

NO_MATCH_LABEL = 'none'


class LanguageIdentificationEvaluator:
    """Accuracy and per-language metrics for whole-text language identification."""

    def __init__(self, target_languages: List[str] = None):
        self.target_languages = target_languages

    def evaluate(self, identifier, samples: List[Dict]) -> Dict:
        """
        Run an identifier over labelled samples and score its predictions.

        Args:
            identifier: A LanguageIdentifier (anything with ``predict(text)``)
            samples: Dicts with ``text`` (sequence of lines) and ``lang`` (expected code)

        Returns:
            Overall metrics, per-language metrics and a confusion matrix
        """
        logger.info(f"Evaluating on {len(samples)} samples...")

        predicted = []
        true = []
        scores = []

        for i, sample in enumerate(samples):
            if 'text' not in sample or 'lang' not in sample:
                raise ValueError(f"Sample {i} must have 'text' and 'lang' keys")

            prediction = identifier.predict(sample['text'])
            predicted.append(prediction['language'])
            true.append(sample['lang'])
            scores.append(prediction['score'])

        return self.evaluate_predictions(predicted, true, scores)

    def evaluate_predictions(self, predicted: List[Optional[str]], true: List[str],
                             scores: List[float] = None) -> Dict:
        """Score predicted codes (None for no match) against expected codes."""
        if len(predicted) != len(true):
            raise ValueError("Number of predictions must match ground truth")

        target_languages = self.target_languages or sorted(set(true))

        per_language = self._calculate_per_language_metrics(predicted, true, target_languages)
        overall = self._calculate_overall_metrics(predicted, true, scores or [], per_language)
        confusion_matrix = self._calculate_confusion_matrix(predicted, true, target_languages)

        return {
            'overall': overall,
            'per_language': per_language,
            'confusion_matrix': confusion_matrix,
            'total_samples': len(true)
        }

    @staticmethod
    def _f1(tp: int, fp: int, fn: int) -> Dict[str, float]:
        precision = tp / (tp + fp) if (tp + fp) > 0 else 0.0
        recall = tp / (tp + fn) if (tp + fn) > 0 else 0.0
        f1 = 2 * precision * recall / (precision + recall) if (precision + recall) > 0 else 0.0
        return {'precision': precision, 'recall': recall, 'f1_score': f1}

    def _calculate_overall_metrics(self, predicted: List[Optional[str]], true: List[str],
                                   scores: List[float], per_language: Dict) -> Dict:
        """Calculate overall accuracy, no-match rate and macro F1."""
        total = len(true)
        correct = sum(1 for p, t in zip(predicted, true) if p == t)
        no_match = sum(1 for p in predicted if p is None)

        lang_f1_scores = [metrics['f1_score'] for metrics in per_language.values()]
        matched_scores = [s for s, p in zip(scores, predicted) if p is not None]

        return {
            'accuracy': correct / total if total > 0 else 0.0,
            'macro_f1': float(np.mean(lang_f1_scores)) if lang_f1_scores else 0.0,
            'no_match_rate': no_match / total if total > 0 else 0.0,
            'correct_samples': correct,
            'total_samples': total,
            'avg_score': float(np.mean(matched_scores)) if matched_scores else 0.0
        }

    def _calculate_per_language_metrics(self, predicted: List[Optional[str]], true: List[str],
                                        target_languages: List[str]) -> Dict:
        """Calculate precision, recall, F1 for each language."""
        language_metrics = {}

        for lang in target_languages:
            tp = sum(1 for p, t in zip(predicted, true) if p == lang and t == lang)
            fp = sum(1 for p, t in zip(predicted, true) if p == lang and t != lang)
            fn = sum(1 for p, t in zip(predicted, true) if p != lang and t == lang)

            metrics = self._f1(tp, fp, fn)
            metrics.update({'support': tp + fn, 'tp': tp, 'fp': fp, 'fn': fn})
            language_metrics[lang] = metrics

        return language_metrics

    def _calculate_confusion_matrix(self, predicted: List[Optional[str]], true: List[str],
                                    target_languages: List[str]) -> Dict:
        """Rows are expected languages, columns predicted ones plus 'none'."""
        confusion = defaultdict(lambda: defaultdict(int))

        for p, t in zip(predicted, true):
            confusion[t][p if p is not None else NO_MATCH_LABEL] += 1

        columns = list(target_languages) + [NO_MATCH_LABEL]
        return {
            true_lang: {pred_lang: confusion[true_lang][pred_lang] for pred_lang in columns}
            for true_lang in target_languages
        }

    def print_evaluation_report(self, evaluation_results: Dict):
        """Print a human-readable evaluation report."""
        print("=" * 60)
        print("LANGUAGE IDENTIFICATION EVALUATION REPORT")
        print("=" * 60)

        overall = evaluation_results['overall']
        print(f"\nOVERALL METRICS:")
        print(f"  Accuracy:          {overall['accuracy']:.4f}")
        print(f"  Macro F1:          {overall['macro_f1']:.4f}")
        print(f"  No-match Rate:     {overall['no_match_rate']:.4f}")
        print(f"  Total Samples:     {overall['total_samples']}")
        print(f"  Avg Score:         {overall['avg_score']:.4f}")

        per_lang = evaluation_results['per_language']
        print(f"\nPER-LANGUAGE F1 SCORES:")
        for lang in sorted(per_lang.keys()):
            metrics = per_lang[lang]
            print(f"  {lang.upper()} ({language_name(lang)}): {metrics['f1_score']:.4f} "
                  f"(support: {metrics['support']})")

        print("\n" + "=" * 60)
