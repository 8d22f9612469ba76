"""
Shared fixtures: policyx files written the way pomdpsol writes them.
"""

import subprocess
from pathlib import Path

import pytest


# Tiger problem: states (tiger-left, tiger-right), actions (listen, open-left, open-right)
TIGER_POLICY = """<?xml version="1.0" encoding="ISO-8859-1"?>
<Policy version="0.1" type="value" model="tiger.pomdpx" xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" xsi:noNamespaceSchemaLocation="policyx.xsd">
<AlphaVector vectorLength="2" numObsValue="1" numVectors="5">
<Vector action="0" obsValue="0">-81.5975 3.01448 </Vector>
<Vector action="0" obsValue="0">3.01448 -81.5975 </Vector>
<Vector action="0" obsValue="0">-19.2047 -19.2047 </Vector>
<Vector action="1" obsValue="0">-90.6219 29.3781 </Vector>
<Vector action="2" obsValue="0">29.3781 -90.6219 </Vector>
</AlphaVector> </Policy>
"""


def policy_xml(vectors, actions, obs_values=None, vector_length=None,
               num_vectors=None, num_obs=1):
    """Render a dense policyx document."""
    if vector_length is None and vectors:
        vector_length = len(vectors[0])
    header = f'numObsValue="{num_obs}" numVectors="{len(vectors) if num_vectors is None else num_vectors}"'
    if vector_length is not None:
        header = f'vectorLength="{vector_length}" ' + header

    lines = [
        '<?xml version="1.0" encoding="ISO-8859-1"?>',
        '<Policy version="0.1" type="value" model="test.pomdpx">',
        f"<AlphaVector {header}>",
    ]
    for i, (vector, action) in enumerate(zip(vectors, actions)):
        obs = "" if obs_values is None else f' obsValue="{obs_values[i]}"'
        body = " ".join(repr(float(v)) for v in vector)
        lines.append(f'<Vector action="{action}"{obs}>{body} </Vector>')
    lines.append("</AlphaVector> </Policy>")
    return "\n".join(lines) + "\n"


@pytest.fixture
def write_policy(tmp_path):
    """Factory: write_policy(vectors, actions, ..., name='out.policy') -> Path"""
    def _write(vectors, actions, obs_values=None, name="out.policy", **attrs):
        path = tmp_path / name
        path.write_text(policy_xml(vectors, actions, obs_values, **attrs))
        return path
    return _write


@pytest.fixture
def tiger_policy_file(tmp_path):
    path = tmp_path / "tiger.policy"
    path.write_text(TIGER_POLICY)
    return path


@pytest.fixture
def model_file(tmp_path):
    path = tmp_path / "tiger.pomdpx"
    path.write_text("<pomdpx/>\n")
    return path


@pytest.fixture
def fake_sarsop(monkeypatch):
    """
    Replace subprocess.run with a recorder.

    Set ``returncode`` / ``stderr`` on the returned object to simulate a
    failure; a successful pomdpsol call writes the Tiger policy to the
    --output path.
    """
    class FakeSarsop:
        def __init__(self):
            self.calls = []
            self.returncode = 0
            self.stderr = ""
            self.policy_text = TIGER_POLICY
            self.missing = False

        def __call__(self, argv, capture_output=False, text=False, cwd=None):
            self.calls.append(list(argv))
            if self.missing:
                raise FileNotFoundError(2, "No such file or directory", argv[0])
            if self.returncode == 0 and "--output" in argv:
                out = Path(argv[argv.index("--output") + 1])
                out.write_text(self.policy_text)
            return subprocess.CompletedProcess(argv, self.returncode, stdout="ok\n", stderr=self.stderr)

    fake = FakeSarsop()
    monkeypatch.setattr(subprocess, "run", fake)
    return fake
