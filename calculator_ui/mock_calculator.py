"""Mock insurance calculator for offline UI testing.

Serves a replica of the calculator's first step with the same field names,
roles and texts the workflows rely on:
- cookie banner #CybotCookiebotDialog with an accept-all button
- buildingArea / buildYear inputs that strip everything but digits
- "Piętro" radio group, property type and yes/no questions
- "Przejdź dalej" button with the build-year validation message

Unlike the live page, the replica's rules are fixed, so tests against it can
assert what the live scenarios only record.

Query parameters select misbehaving variants of the consent banner:
- ?consent=duplicate  renders two accept buttons
- ?consent=missing    renders none
- ?consent=stuck      the accept button does not close the banner
"""
from __future__ import annotations

from datetime import date
from typing import Any, Dict, List

from flask import Flask, render_template_string, request

from calculator_ui.locators import INVALID_YEAR_MESSAGE

CALCULATOR_PATH = "/kalkulator-ubezpieczenia-mieszkania-i-domu/"
NEXT_STEP_PATH = CALCULATOR_PATH + "krok-2/"

ACCEPT_TEXT = "Zezwól na wszystkie"
AREA_REQUIRED_MESSAGE = "Wpisz powierzchnię budynku."

# Every visit to the next step, newest last
SUBMISSIONS: List[Dict[str, Any]] = []


CALCULATOR_TEMPLATE = """<!DOCTYPE html>
<html lang="pl">
<head>
  <meta charset="utf-8">
  <title>Kalkulator ubezpieczenia mieszkania i domu</title>
  <style>
    #CybotCookiebotDialog { position: fixed; bottom: 0; left: 0; right: 0; padding: 16px; background: #fff; }
    .error { color: #c00; }
    [hidden] { display: none !important; }
  </style>
</head>
<body>
  <main>
    <h1>Kalkulator ubezpieczenia mieszkania i domu</h1>
    <form id="calculator" novalidate>
      <div role="radiogroup" aria-label="Rodzaj nieruchomości">
        <label><input type="radio" name="propertyType" value="flat"> Mieszkanie</label>
        <label><input type="radio" name="propertyType" value="house"> Dom</label>
      </div>

      <div role="radiogroup" aria-label="Czy budynek jest ukończony?">
        <label><input type="radio" name="finished" value="yes"> Tak</label>
        <label><input type="radio" name="finished" value="no"> Nie</label>
      </div>

      <div id="roof-question"></div>

      <p>
        <label for="buildingArea">Powierzchnia</label>
        <input id="buildingArea" type="text" inputmode="numeric" name="buildingArea" placeholder="Wpisz metraż">
        <span id="area-error" class="error" hidden>{{ area_message }}</span>
      </p>

      <p>
        <input id="buildYear" type="text" inputmode="numeric" name="buildYear" aria-label="Wpisz rok budowy" placeholder="Wpisz rok budowy">
        <span id="year-error" class="error" hidden>{{ year_message }}</span>
      </p>

      <div role="radiogroup" aria-label="Piętro">
        <label><input type="radio" name="floor" value="ground"> Parter</label>
        <label><input type="radio" name="floor" value="middle"> Pośrednie</label>
        <label><input type="radio" name="floor" value="top"> Ostatnie</label>
      </div>

      <button type="button" id="next">Przejdź dalej</button>
    </form>
  </main>

  <div id="CybotCookiebotDialog" role="dialog" aria-label="Zgoda na pliki cookie">
    <p>Ta strona korzysta z plików cookie.</p>
    <button type="button" class="deny">Odmów</button>
    {% for _ in range(accept_buttons) %}
    <button type="button" class="accept">{{ accept_text }}</button>
    {% endfor %}
  </div>

  <script>
    const CURRENT_YEAR = {{ current_year }};
    const STUCK = {{ 'true' if stuck else 'false' }};
    const banner = document.getElementById('CybotCookiebotDialog');
    document.querySelectorAll('#CybotCookiebotDialog button').forEach(function (button) {
      button.addEventListener('click', function () {
        if (!STUCK) { banner.hidden = true; }
      });
    });

    function digitsOnly(input, maxLength) {
      input.addEventListener('input', function () {
        let value = input.value.replace(/[^0-9]/g, '');
        if (maxLength) { value = value.slice(0, maxLength); }
        if (value !== input.value) { input.value = value; }
      });
    }
    const area = document.getElementById('buildingArea');
    const year = document.getElementById('buildYear');
    digitsOnly(area, 0);
    digitsOnly(year, 4);

    document.querySelectorAll('input[name="finished"]').forEach(function (radio) {
      radio.addEventListener('change', function () {
        const slot = document.getElementById('roof-question');
        if (slot.childElementCount) { return; }
        slot.innerHTML =
          '<div role="radiogroup" aria-label="Czy budynek ma dach oraz ściany zewnętrzne?">' +
          '<label><input type="radio" name="roof" value="yes"> Tak</label>' +
          '<label><input type="radio" name="roof" value="no"> Nie</label>' +
          '</div>';
      });
    });

    document.getElementById('next').addEventListener('click', function () {
      const yearValue = parseInt(year.value, 10);
      const yearValid = !isNaN(yearValue) && yearValue >= 1000 && yearValue <= CURRENT_YEAR;
      const areaValid = area.value.length > 0;
      document.getElementById('year-error').hidden = yearValid;
      document.getElementById('area-error').hidden = areaValid;
      if (yearValid && areaValid) {
        const floor = document.querySelector('input[name="floor"]:checked');
        const query = new URLSearchParams({
          buildingArea: area.value,
          buildYear: year.value,
          floor: floor ? floor.value : ''
        });
        window.location.assign('krok-2/?' + query.toString());
      }
    });
  </script>
</body>
</html>
"""

NEXT_STEP_TEMPLATE = """<!DOCTYPE html>
<html lang="pl">
<head><meta charset="utf-8"><title>Krok 2</title></head>
<body><main><h1>Krok 2</h1></main></body>
</html>
"""


def reset_mock_state() -> None:
    SUBMISSIONS.clear()


def create_mock_calculator_app() -> Flask:
    """Create and configure the mock calculator Flask app."""
    app = Flask(__name__)
    app.config['TESTING'] = True

    @app.route(CALCULATOR_PATH)
    def calculator():
        consent = request.args.get('consent', 'ok')
        accept_buttons = {'duplicate': 2, 'missing': 0}.get(consent, 1)
        return render_template_string(
            CALCULATOR_TEMPLATE,
            accept_text=ACCEPT_TEXT,
            accept_buttons=accept_buttons,
            stuck=consent == 'stuck',
            current_year=date.today().year,
            year_message=INVALID_YEAR_MESSAGE,
            area_message=AREA_REQUIRED_MESSAGE,
        )

    @app.route(NEXT_STEP_PATH)
    def next_step():
        SUBMISSIONS.append(dict(request.args))
        return render_template_string(NEXT_STEP_TEMPLATE)

    return app
