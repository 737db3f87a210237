import unittest

from interpreter import Interpreter
from source_map import reset_source_map
from transcriber import transcribe
from values import MK_NUMBER


class TranscriberTestCase(unittest.TestCase):

    def test_keywords(self):
        cases = {
            "permit x equivalate to 5 fr": "let x = 5 ;",
            "no_change y equivalate to nothin fr": "const y = null ;",
            "street add(a, b) { a plus b }": "fn add(a, b) { a + b }",
            "si (yuh) { 1 } si_no { 2 }": "if (true) { 1 } else { 2 }",
            "foh (permit i equivalate to 0 fr i diesto 3 fr i plusplus) {}":
                "for (let i = 0 ; i < 3 ; i ++) {}",
            "frick_around { 1 } find_out { 2 }": "try { 1 } catch { 2 }",
            "a fw b moreover c dont_fw d": "a == b && c != d",
            "einstein.sqrt(4) times 2 divided by 1 minus 3": "math.sqrt(4) * 2 / 1 - 3",
        }
        for source, expected in cases.items():
            self.assertEqual(transcribe(source), expected, source)

    def test_whole_words_only(self):
        for case in ["permitted", "fried", "timeshare", "sink", "x_fr"]:
            self.assertEqual(transcribe(case), case)

    def test_strings_are_left_alone(self):
        self.assertEqual(transcribe('spitbars("permit me fr")'), 'print("permit me fr")')
        self.assertEqual(transcribe('"si" si "no"'), '"si" if "no"')

    def test_type_annotations_are_removed(self):
        self.assertEqual(transcribe("permit x: number equivalate to 1 fr"), "let x = 1 ;")
        self.assertEqual(transcribe("street f(a: string, b: object) {}"), "fn f(a, b) {}")

    def test_canonical_source_is_unchanged(self):
        source = "let x = 1; fn f(a) { a * 2 } if (x < 2) { print(f(x)); }"
        self.assertEqual(transcribe(source), source)

    def test_transcribed_program_runs(self):
        reset_source_map()
        source = transcribe("permit x equivalate to 2 fr street twice(n) { n times 2 } twice(x) plus 1 fr")
        self.assertEqual(Interpreter(natives={}).run(source), MK_NUMBER(5))


if __name__ == '__main__':
    unittest.main()
