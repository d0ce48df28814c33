import pytest
from fastapi.testclient import TestClient
from app.api.routes import get_services
from app.core.container import build_services
from app.main import app

FB38_HTML = """
<html>
<body>
    <div class="sqs-html-content">
        <h2>MANDAG</h2>
        <p>VARMMAT</p>
        <p>Chili con Carne, tortilla chips, rømme og ris (-) Chili sin Carne (vegan)</p>
        <p>DAGENS SUPPE</p>
        <p>Spinatsuppe (7)</p>
        <p>DAGENS SALAT</p>
        <p>Cæsarsalat</p>
    </div>
    <div class="sqs-html-content">
        <h2>TIRSDAG</h2>
        <p>VARMMAT</p>
        <p>Karbonader med soppsaus (-) Pasta ala Vodka</p>
        <p>DAGENS SUPPE</p>
        <p>Indisk kyllingsuppe</p>
        <p>DAGENS SALAT</p>
        <p>Råkostsalat</p>
    </div>
    <div class="sqs-html-content">
        <h2>ONSDAG</h2>
        <p>VARMMAT</p>
        <p>Kyllingtaco</p>
        <p>DAGENS SUPPE</p>
        <p>Kremet paprikasuppe</p>
    </div>
    <div class="sqs-html-content">
        <p>Velkommen til kantina!</p>
    </div>
</body>
</html>
"""

N58_HTML = """
<html>
<body>
    <table>
        <tr><th>Dag</th><th>Hovedrett</th><th>Suppe</th></tr>
        <tr>
            <td><a class="dag">Mandag</a></td>
            <td><a class="hovedrett">Fiskesuppe</a></td>
            <td><a class="suppe">Potetsuppe</a></td>
        </tr>
        <tr>
            <td><a class="dag">Tirsdag</a></td>
            <td><a class="hovedrett">Lasagne</a></td>
            <td></td>
        </tr>
        <tr>
            <td></td>
            <td><a class="hovedrett">Uten dag</a></td>
            <td><a class="suppe">Tomatsuppe</a></td>
        </tr>
        <tr>
            <td><a class="dag">Fredag</a></td>
            <td><a class="hovedrett">Taco</a></td>
            <td><a class="suppe">Tacosuppe</a></td>
        </tr>
    </table>
</body>
</html>
"""

class FakeClock:
    """Settable replacement for time.time"""

    def __init__(self, now: float = 1_760_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

@pytest.fixture
def clock():
    return FakeClock()

@pytest.fixture
def fb38_html():
    return FB38_HTML

@pytest.fixture
def n58_html():
    return N58_HTML

@pytest.fixture
def services(tmp_path):
    """Fresh services on a temporary shared directory"""
    return build_services(shared_dir=str(tmp_path / "shared"))

@pytest.fixture
def client(services):
    """API client wired to the temporary services"""
    app.dependency_overrides[get_services] = lambda: services
    yield TestClient(app)
    app.dependency_overrides.clear()
