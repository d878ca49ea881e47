import bz2

import pytest


SAMPLE_DUMP = """<mediawiki xmlns="http://www.mediawiki.org/xml/export-0.10/" xml:lang="de">
  <siteinfo>
    <sitename>Wikipedia</sitename>
  </siteinfo>
  <page>
    <title>Otto Schmidt</title>
    <ns>0</ns>
    <id>1</id>
    <revision>
      <id>10</id>
      <text xml:space="preserve">{{Personendaten
|NAME=Schmidt, Otto
|KURZBESCHREIBUNG=deutscher Politiker
}}</text>
    </revision>
  </page>
  <page>
    <title>Leere Seite</title>
    <ns>0</ns>
    <id>2</id>
    <revision>
      <id>11</id>
      <text xml:space="preserve" />
    </revision>
  </page>
  <page>
    <title>Otto Müller</title>
    <ns>0</ns>
    <id>3</id>
    <revision>
      <id>12</id>
      <text xml:space="preserve">{{Personendaten|NAME=Müller, Otto Karl}}</text>
    </revision>
    <revision>
      <id>13</id>
      <text xml:space="preserve">{{Personendaten|NAME=Müller, Karl}}</text>
    </revision>
  </page>
  <page>
    <title>Max Weber</title>
    <ns>0</ns>
    <id>4</id>
    <revision>
      <id>14</id>
      <text xml:space="preserve">{{Personendaten|NAME=Weber, Max}}</text>
    </revision>
  </page>
</mediawiki>
"""


@pytest.fixture
def dump_bytes():
    return SAMPLE_DUMP.encode("utf-8")


@pytest.fixture
def dump_file(tmp_path, dump_bytes):
    path = tmp_path / "dewiki-test-pages-articles.xml.bz2"
    path.write_bytes(bz2.compress(dump_bytes))
    return path
