"""Tests for the file classifier."""

from lfs_warning.analysis.file_classifier import (
    LFS_POINTER_SIGNATURE,
    ChangedFile,
    ClassificationResult,
    classify_files,
    has_pointer_signature,
    remove_excluded,
)
from lfs_warning.analysis.patterns import PatternSet

THRESHOLD = 1000

POINTER_PATCH = (
    "@@ -0,0 +1,3 @@\n"
    f"+{LFS_POINTER_SIGNATURE}\n"
    "+oid sha256:4d7a214614ab2935c943f9e0ff69d22eadbb8f32b1258daaa5e2ca24d17e2393\n"
    "+size 12345\n"
)


def classify(files, attributes, text_probe, patterns=None, threshold=THRESHOLD):
    return classify_files(files, patterns or PatternSet(), threshold, attributes, text_probe)


def test_no_files_is_empty_result(attributes, text_probe):
    result = classify([], attributes, text_probe)

    assert result.is_empty
    assert result == ClassificationResult()


def test_oversized_file_lands_only_in_oversized(attributes, text_probe):
    attributes.lfs_paths.add("big.zip")
    text_probe.binary_paths.add("big.zip")
    files = [ChangedFile("big.zip", blob_size=THRESHOLD + 1)]

    result = classify(
        files, attributes, text_probe, PatternSet(inclusion=["*.zip"], binary_extension=["*.zip"])
    )

    assert result.oversized == ["big.zip"]
    assert result.misdeclared_lfs == []
    assert result.suspected_binary == []
    assert result.pattern_flagged == []
    assert text_probe.calls == []


def test_file_at_threshold_is_not_oversized(attributes, text_probe):
    result = classify([ChangedFile("edge.txt", blob_size=THRESHOLD)], attributes, text_probe)

    assert result.is_empty


def test_lfs_file_without_pointer_is_misdeclared(attributes, text_probe):
    attributes.lfs_paths.add("model.bin")
    files = [ChangedFile("model.bin", blob_size=10, patch="binary diff suppressed")]

    result = classify(files, attributes, text_probe)

    assert result.misdeclared_lfs == ["model.bin"]
    assert result.suspected_binary == []


def test_lfs_file_with_pointer_passes(attributes, text_probe):
    attributes.lfs_paths.add("model.bin")
    files = [ChangedFile("model.bin", blob_size=130, patch=POINTER_PATCH)]

    result = classify(files, attributes, text_probe)

    assert result.is_empty
    assert text_probe.calls == []


def test_lfs_file_without_patch_is_misdeclared(attributes, text_probe):
    attributes.lfs_paths.add("image.psd")
    files = [ChangedFile("image.psd", blob_size=500, patch=None)]

    result = classify(files, attributes, text_probe)

    assert result.misdeclared_lfs == ["image.psd"]


def test_binary_file_not_in_lfs_is_suspected(attributes, text_probe):
    text_probe.binary_paths.add("lib/native.so")
    files = [ChangedFile("lib/native.so", blob_size=200), ChangedFile("src/app.py", blob_size=50)]

    result = classify(files, attributes, text_probe)

    assert result.suspected_binary == ["lib/native.so"]
    assert text_probe.calls == ["lib/native.so", "src/app.py"]


def test_unknown_blob_size_still_checked(attributes, text_probe):
    text_probe.binary_paths.add("blob.dat")
    files = [ChangedFile("blob.dat", blob_size=None)]

    result = classify(files, attributes, text_probe, threshold=0)

    assert result.oversized == []
    assert result.suspected_binary == ["blob.dat"]


def test_excluded_file_is_never_flagged(attributes, text_probe):
    attributes.lfs_paths.add("docs/huge.png")
    text_probe.binary_paths.update({"docs/huge.png", "readme.png"})
    files = [
        ChangedFile("docs/huge.png", blob_size=THRESHOLD * 10),
        ChangedFile("readme.png", blob_size=10),
    ]
    patterns = PatternSet(exclusion=["**/*.png"], inclusion=["**/*.png"])

    result = classify(files, attributes, text_probe, patterns)

    assert result.is_empty
    assert attributes.calls == []
    assert text_probe.calls == []


def test_inclusion_pattern_flags_text_file_not_in_lfs(attributes, text_probe):
    files = [ChangedFile("data/weights.csv", blob_size=100)]

    result = classify(files, attributes, text_probe, PatternSet(inclusion=["data/*.csv"]))

    assert result.pattern_flagged == ["data/weights.csv"]


def test_binary_pattern_flags_file_not_in_lfs(attributes, text_probe):
    files = [ChangedFile("models/net.onnx", blob_size=100)]

    result = classify(
        files, attributes, text_probe, PatternSet(binary_extension=["**/*.{onnx,pt}"])
    )

    assert result.pattern_flagged == ["models/net.onnx"]


def test_pattern_match_skipped_when_lfs_filtered(attributes, text_probe):
    attributes.lfs_paths.add("models/net.onnx")
    files = [ChangedFile("models/net.onnx", blob_size=130, patch=POINTER_PATCH)]

    result = classify(
        files, attributes, text_probe, PatternSet(binary_extension=["**/*.onnx"])
    )

    assert result.is_empty


def test_pattern_pass_does_not_duplicate_earlier_buckets(attributes, text_probe):
    text_probe.binary_paths.add("app.zip")
    files = [
        ChangedFile("big.zip", blob_size=THRESHOLD + 1),
        ChangedFile("app.zip", blob_size=10),
        ChangedFile("notes.zip", blob_size=10),
    ]
    patterns = PatternSet(inclusion=["*.zip"], binary_extension=["*.zip"])

    result = classify(files, attributes, text_probe, patterns)

    assert result.oversized == ["big.zip"]
    assert result.suspected_binary == ["app.zip"]
    assert result.pattern_flagged == ["notes.zip"]


def test_attribute_lookup_is_cached_across_passes(attributes, text_probe):
    files = [ChangedFile("notes.zip", blob_size=10)]

    classify(files, attributes, text_probe, PatternSet(inclusion=["*.zip"]))

    assert attributes.calls == ["notes.zip"]


def test_log_receives_diagnostics(attributes, text_probe):
    text_probe.binary_paths.add("a.bin")
    messages = []

    classify_files(
        [ChangedFile("a.bin", blob_size=1), ChangedFile("skip.bin", blob_size=1)],
        PatternSet(exclusion=["skip.*"]),
        THRESHOLD,
        attributes,
        text_probe,
        log=messages.append,
    )

    assert "skip.bin has been excluded from LFS warning" in messages
    assert "File is considered binary but not LFS tracked: a.bin" in messages


def test_remove_excluded_without_patterns_keeps_everything():
    files = [ChangedFile("a"), ChangedFile("b")]

    assert remove_excluded(files, []) == files


def test_has_pointer_signature():
    assert has_pointer_signature(POINTER_PATCH) is True
    assert has_pointer_signature("+binary junk") is False
    assert has_pointer_signature(None) is False
    assert has_pointer_signature("") is False
