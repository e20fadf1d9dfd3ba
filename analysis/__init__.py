from analysis.assembler import ArticleAssembler
from analysis.lexical import analyze
from analysis.models import Article, GenerationRequest
from analysis.scoring import DEFAULT_POLICY, ScoringPolicy, score_article
from analysis.segmenter import segment
from analysis.slugs import derive_slug

__all__ = [
    "ArticleAssembler",
    "Article",
    "GenerationRequest",
    "DEFAULT_POLICY",
    "ScoringPolicy",
    "analyze",
    "derive_slug",
    "score_article",
    "segment",
]
