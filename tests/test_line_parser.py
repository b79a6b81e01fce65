"""
Tests for the Line Parser

End-to-end scenarios on real part description lines, plus LineParser
options and catalog injection.
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from partspec import (
    FieldSpec, LineParser, UNRECOGNIZED,
    tokenize_line, parse_line, populate_spec_fields, summarize_fields
)
from partspec.config import PartSpecConfig
from partspec.field_catalog import constant, rule

PIPE_LINE = 'PIPE, SCH STD, CS A-106B/A-53B/API 5L-B SMLS, P/D CODE PSA01 BBE, 3"'
SLIP_ON_LINE = 'FLG, RFSO, CL 150, SCH STD, FCS A105, ASME B16.5, P/D CODE FSA01, 20"'
BLIND_LINE = 'FLG BLIND, RF,CL 150, FCS A105 ASME B16.5, 20"'
WELD_NECK_LINE = 'FLG, RFWN, CL 150, SCH STD, FCS A105 ASME B16.5, P/D CODE FWA01, 24"'


def fields_of(line, parser=None):
    if parser is None:
        return summarize_fields(populate_spec_fields(parse_line(line)))
    return summarize_fields(parser.parse_line(line).fields)


class TestScenarios:
    """Sample lines from pipe and flange bills of material."""

    def test_pipe_line(self):
        assert tokenize_line(PIPE_LINE) == [
            'PIPE', 'SCH STD', 'CS A-106B/A-53B/API 5L-B SMLS', 'P/D CODE PSA01 BBE', '3"'
        ]
        fields = fields_of(PIPE_LINE)
        assert fields['PRODUCT TYPE'] == ['PIPE']
        assert fields['BORE SCHEDULE SIZE'] == ['STANDARD']
        assert fields['SIZE'] == ['3']
        assert fields[UNRECOGNIZED] == [
            'CS A-106B/A-53B/API 5L-B SMLS', 'P/D CODE PSA01 BBE'
        ]

    def test_slip_on_flange_line(self):
        assert tokenize_line(SLIP_ON_LINE) == [
            'FLG', 'RFSO', 'CL 150', 'SCH STD', 'FCS A105', 'ASME B16.5',
            'P/D CODE FSA01', '20"'
        ]
        fields = fields_of(SLIP_ON_LINE)
        assert fields['PRODUCT TYPE'] == ['FLANGE']
        assert fields['PRESSURE RATING'] == ['150']
        assert fields['BORE SCHEDULE SIZE'] == ['STANDARD']
        assert fields['MATERIAL'] == ['A105', 'ASME B16.5']
        assert fields['SIZE'] == ['20']
        assert fields['FLANGE TYPE'] == []
        assert fields[UNRECOGNIZED] == ['RFSO', 'P/D CODE FSA01']

    def test_blind_flange_line(self):
        """Without the split pass, the comma-free material stays unrecognized."""
        assert tokenize_line(BLIND_LINE) == [
            'FLG BLIND', 'RF', 'CL 150', 'FCS A105 ASME B16.5', '20"'
        ]
        fields = fields_of(BLIND_LINE)
        assert fields['PRESSURE RATING'] == ['150']
        assert fields['SIZE'] == ['20']
        assert fields['MATERIAL'] == []
        assert fields[UNRECOGNIZED] == ['FLG BLIND', 'RF', 'FCS A105 ASME B16.5']

    def test_blind_flange_line_with_split(self):
        """The split pass recovers both material values."""
        parser = LineParser(split_unrecognized=True)
        assert parser.tokenize(BLIND_LINE) == [
            'FLG', 'BLIND', 'RF', 'CL 150', 'FCS A105', 'ASME B16.5', '20"'
        ]
        fields = fields_of(BLIND_LINE, parser)
        assert fields['PRODUCT TYPE'] == ['FLANGE']
        assert fields['MATERIAL'] == ['A105', 'ASME B16.5']
        assert fields[UNRECOGNIZED] == ['BLIND', 'RF']

    def test_weld_neck_line_with_split(self):
        parser = LineParser(split_unrecognized=True)
        fields = fields_of(WELD_NECK_LINE, parser)
        assert fields['MATERIAL'] == ['A105', 'ASME B16.5']
        assert fields['SIZE'] == ['24']
        assert 'RFWN' in fields[UNRECOGNIZED]

    def test_empty_token_unrecognized(self):
        results = parse_line('PIPE,, 3"')
        assert [r.token for r in results] == ['PIPE', '', '3"']
        fields = populate_spec_fields(results)
        assert [(e.kind, e.token, e.value) for e in fields[-1].matches] == [
            (UNRECOGNIZED, '', '')
        ]

    def test_empty_line(self):
        fields = fields_of('')
        assert fields[UNRECOGNIZED] == ['']

    def test_carbon_steel_once(self):
        """CS lands once in MATERIAL and in no other field."""
        fields = fields_of('PIPE, CS, 3"')
        assert fields['MATERIAL'] == ['CARBON STEEL']
        others = [k for k, v in fields.items() if 'CARBON STEEL' in v or 'CS' in v]
        assert others == ['MATERIAL']


class TestLineParser:
    """Tests for LineParser options and injection."""

    def test_defaults_match_module_functions(self):
        parser = LineParser()
        for line in [PIPE_LINE, SLIP_ON_LINE, BLIND_LINE, WELD_NECK_LINE]:
            assert parser.tokenize(line) == tokenize_line(line)
            assert parser.parse(line) == parse_line(line)

    def test_legacy_pair_merge(self):
        assert LineParser().tokenize('PIPE, SCH, STD') == ['PIPE', 'SCH STD']
        assert LineParser(legacy_pair_merge=True).tokenize('PIPE, SCH, STD') == [
            'PIPE', 'SCH', 'STD'
        ]

    def test_custom_delimiter(self):
        parser = LineParser(delimiter=r"; ?")
        assert parser.tokenize('PIPE; 3"') == ['PIPE', '3"']

    def test_injected_catalog(self):
        catalog = [FieldSpec("END", (rule("BEVELED", r"BBE|BE", constant("BEVELED")),))]
        parser = LineParser(catalog=catalog)
        parsed = parser.parse_line('PIPE, BBE')
        assert [f.kind for f in parsed.fields] == ['END', UNRECOGNIZED]
        assert parsed.fields[0].values == ['BEVELED']
        assert parsed.fields[1].values == ['PIPE']

    def test_injected_catalog_validated(self):
        catalog = [FieldSpec("END", ()), FieldSpec("END", ())]
        with pytest.raises(ValueError):
            LineParser(catalog=catalog)

    def test_from_config(self):
        config = PartSpecConfig()
        config.tokenizer.split_unrecognized = True
        parser = LineParser.from_config(config)
        assert parser.split_unrecognized
        assert not parser.legacy_pair_merge

    def test_parse_lines_independent(self):
        parser = LineParser()
        parsed = parser.parse_lines([SLIP_ON_LINE, PIPE_LINE])
        assert [p.line for p in parsed] == [SLIP_ON_LINE, PIPE_LINE]
        assert parsed[1].tokens == tokenize_line(PIPE_LINE)
        assert parser.parse_lines([PIPE_LINE])[0].to_dict() == parsed[1].to_dict()


class TestNonAsciiDigits:
    """Lines with non-ASCII digits leave those tokens unrecognized."""

    def test_fullwidth_and_arabic_indic_digits(self):
        results = parse_line('PIPE, ２０", ١٥٠#')
        assert [(r.token, r.matched) for r in results] == [
            ('PIPE', True), ('２０"', False), ('١٥٠#', False)
        ]
        fields = summarize_fields(populate_spec_fields(results))
        assert fields['SIZE'] == []
        assert fields['PRESSURE RATING'] == []
        assert fields[UNRECOGNIZED] == ['２０"', '١٥٠#']
