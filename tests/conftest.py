from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest


SCREENS_XML = """<?xml version="1.0" encoding="UTF-8"?>
<screens>
  <screen name="main">
    <text value="T1" font="0"/>
    <text/>
    <variable_region>
      <text value="T2" font="1"/>
      <variable_region>
        <text value="T3" font="2"/>
      </variable_region>
    </variable_region>
  </screen>
  <screen name="settings">
    <text value="T2" font="2"/>
  </screen>
</screens>
"""

TRANSLATIONS_XML = """<?xml version="1.0" encoding="UTF-8"?>
<xliff>
  <trans-unit name="T1"><source>AB</source><target>BA</target></trans-unit>
  <trans-unit name="T2"><source>é</source></trans-unit>
  <trans-unit name="T3"><source>z</source></trans-unit>
</xliff>
"""

ATTRIBUTES_XML = """<?xml version="1.0" encoding="UTF-8"?>
<PhysicalAttributes>
  <Fonts>
    <Font Name="FONT2" TrueTypeLib="mono.ttf" Size="8" Width="6" Height="8" StartX="4" StartY="2"/>
    <Font Name="FONT0" TrueTypeLib="arial.ttf" Size="12" Width="8" Height="10" StartX="0" StartY="0"/>
    <Font Name="FONT1" TrueTypeLib="serif.ttf" Size="16" Width="10" Height="14" StartX="0" StartY="16"/>
  </Fonts>
</PhysicalAttributes>
"""


@pytest.fixture
def write_xml(tmp_path: Path) -> Callable[[str, str], Path]:
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def documents(write_xml: Callable[[str, str], Path]) -> dict[str, Path]:
    return {
        "screens": write_xml("screens.xml", SCREENS_XML),
        "translations": write_xml("strings.xml", TRANSLATIONS_XML),
        "attributes": write_xml("physical.xml", ATTRIBUTES_XML),
    }
