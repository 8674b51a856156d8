"""Shared helpers for building synthetic OpenJTalk full-context labels."""

import pytest


def build_label(
    p3: str,
    a2: str = "xx",
    a3: str = "xx",
    f1: str = "xx",
    f2: str = "xx",
    f3: str = "xx",
    f5: str = "xx",
    h1: str = "xx",
    i3: str = "xx",
    j1: str = "xx",
) -> str:
    """One label line with the given context fields and "xx" everywhere else."""
    return (
        f"xx^xx-{p3}+xx=xx/A:xx+{a2}+{a3}/B:xx-xx_xx/C:xx_xx+xx/D:xx+xx_xx"
        f"/E:xx_xx!xx_xx-xx/F:{f1}_{f2}#{f3}_xx@{f5}_xx|xx_xx/G:xx_xx%xx_xx_xx"
        f"/H:{h1}_xx/I:xx-xx@{i3}+xx&xx-xx|xx+xx/J:{j1}_xx/K:xx+xx-xx"
    )


def build_utterance_labels(breath_groups: list) -> list[str]:
    """Labels for an utterance, wrapped in sil and with pau between breath groups.

    ``breath_groups`` is a list of breath groups, each a list of
    ``(moras, accent, is_interrogative)`` accent phrases, where ``moras`` is a
    list of phoneme lists, e.g. ``[["k", "a"], ["N"]]``.
    """
    labels = [build_label("sil")]
    for i, group in enumerate(breath_groups, start=1):
        if i > 1:
            labels.append(build_label("pau"))
        for j, (moras, accent, interrogative) in enumerate(group, start=1):
            n = len(moras)
            for k, mora in enumerate(moras, start=1):
                for phoneme in mora:
                    labels.append(build_label(
                        phoneme,
                        a2=str(k),
                        a3=str(n - k + 1),
                        f1=str(n),
                        f2=str(accent),
                        f3="1" if interrogative else "0",
                        f5=str(j),
                        i3=str(i),
                    ))
    labels.append(build_label("sil"))
    return labels


@pytest.fixture
def label_line():
    return build_label


@pytest.fixture
def make_labels():
    return build_utterance_labels
