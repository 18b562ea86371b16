"""
koreanphraseminer.smoke_test

Minimal end-to-end smoke test for KoreanPhraseMiner.

Usage (from your project root or any directory where the env is active):

    python -m koreanphraseminer.smoke_test

What it does:
- Creates a tiny in-memory corpus of short Korean posts.
- Runs KoreanPhraseExtractor (Kiwi backend) sentence by sentence.
- Builds a PhraseRecord DataFrame.
- Prints a short summary to stdout.

Kiwi ships its model with the ``kiwipiepy_model`` wheel; if it is missing,
reinstall with:

    pip install --force-reinstall kiwipiepy
"""

from __future__ import annotations

from typing import Any, Dict

from .phrase_extractor import KoreanPhraseExtractor


def run_smoke_test(verbose: bool = True) -> Dict[str, Any]:
    """
    Run a small end-to-end test of the main pipeline.

    Returns
    -------
    result : dict
        A dictionary containing:
        - "docs"
        - "phrase_records"
        - "sentences_by_doc"
        - "phrases_df"
    """
    docs = [
        # Doc 1 – the canonical example
        "한국어를 처리하는 예시입니다. 초거대기업의 새로운 서비스가 출시됐다.",
        # Doc 2 – trending topic with a hashtag
        "주말에 본 영화 정말 재밌었다! 배우들의 연기가 최고였음 #주말영화",
        # Doc 3 – news-like sentence
        "정부는 오늘 청년 일자리 정책과 주택 공급 대책을 함께 발표했다.",
    ]

    log = print if verbose else (lambda *_args, **_kwargs: None)

    log("[smoke_test] Starting KoreanPhraseMiner smoke test...")
    log(f"[smoke_test] Using {len(docs)} small demo documents.")

    extractor = KoreanPhraseExtractor(
        method="kiwi",
        enable_hashtags=True,
        logger=log,
        verbose=verbose,
    )
    phrase_records, sentences_by_doc = extractor.mine_phrases(docs)
    phrases_df = extractor.records_to_frame(phrase_records)

    log(
        f"[smoke_test] Mined {len(phrase_records)} phrase records "
        f"across {len(sentences_by_doc)} document(s)."
    )
    for doc_index, doc in enumerate(docs):
        log(f"[smoke_test] doc {doc_index}: {extractor.extract_phrase_texts(doc)}")
    log("[smoke_test] Smoke test completed successfully ✅")

    return {
        "docs": docs,
        "phrase_records": phrase_records,
        "sentences_by_doc": sentences_by_doc,
        "phrases_df": phrases_df,
    }


def main() -> None:
    """
    CLI entrypoint for: python -m koreanphraseminer.smoke_test
    """
    try:
        run_smoke_test(verbose=True)
    except ImportError as e:
        # Common case: tokenizer backend not installed
        print("\n[smoke_test] ERROR during KoreanPhraseMiner smoke test.")
        print(f"[smoke_test] Underlying error: {e}\n")
        # Re-raise so CI / scripts still see a failure
        raise


if __name__ == "__main__":
    main()
