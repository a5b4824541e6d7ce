import unittest

from github_pr_generator.exceptions import ResponseParseError
from github_pr_generator.services.response_parser import (
    extract_response_block,
    parse_model_response,
    parse_response_document,
)


ADD_LOGGING_RESPONSE = (
    "<response><pullRequest><title>Add Logging</title><body>Adds a logger.</body></pullRequest>"
    "<files><file><path>src/log.ts</path><content>export const log = console.log;</content></file></files>"
    "</response>"
)


def build_response(files, title="Title", body="Body"):
    file_xml = "".join(
        f"<file><path>{path}</path><content>{content}</content></file>" for path, content in files
    )
    return (
        f"<response><pullRequest><title>{title}</title><body>{body}</body></pullRequest>"
        f"<files>{file_xml}</files></response>"
    )


class TestExtractResponseBlock(unittest.TestCase):

    def test_block_surrounded_by_free_text(self):
        text = f"Sure, here are the changes:\n```xml\n{ADD_LOGGING_RESPONSE}\n```\nLet me know!"
        self.assertEqual(extract_response_block(text), ADD_LOGGING_RESPONSE)

    def test_first_block_wins(self):
        second = build_response([("b.txt", "b")], title="Second")
        first = build_response([("a.txt", "a")], title="First")
        self.assertEqual(extract_response_block(first + "\n" + second), first)

    def test_closing_tag_before_opening_tag_is_ignored(self):
        text = "stray </response> text " + ADD_LOGGING_RESPONSE
        self.assertEqual(extract_response_block(text), ADD_LOGGING_RESPONSE)

    def test_missing_opening_tag(self):
        with self.assertRaises(ResponseParseError) as ctx:
            extract_response_block("I could not produce any changes.")
        self.assertEqual(ctx.exception.details["parse_stage"], "extract")

    def test_missing_closing_tag(self):
        with self.assertRaises(ResponseParseError):
            extract_response_block("<response><pullRequest><title>x</title>")

    def test_closing_tag_only(self):
        with self.assertRaises(ResponseParseError):
            extract_response_block("nothing here </response>")


class TestParseResponseDocument(unittest.TestCase):

    def test_add_logging_scenario(self):
        changes = parse_response_document(ADD_LOGGING_RESPONSE)

        self.assertEqual(changes.pull_request.title, "Add Logging")
        self.assertEqual(changes.pull_request.body, "Adds a logger.")
        self.assertEqual(len(changes.edits), 1)
        self.assertEqual(changes.edits[0].path, "src/log.ts")
        self.assertEqual(changes.edits[0].content, "export const log = console.log;")

    def test_k_files_parse_to_k_edits_in_document_order(self):
        files = [(f"src/file_{i}.py", f"value = {i}\n") for i in range(7)]
        changes = parse_response_document(build_response(files))

        self.assertEqual([(e.path, e.content) for e in changes.edits], files)

    def test_zero_files_fails(self):
        for files_xml in ("<files></files>", "<files/>"):
            with self.subTest(files_xml=files_xml):
                with self.assertRaises(ResponseParseError) as ctx:
                    parse_response_document(
                        "<response><pullRequest><title>T</title><body>B</body></pullRequest>"
                        f"{files_xml}</response>"
                    )
                self.assertEqual(ctx.exception.details["parse_stage"], "decode")

    def test_duplicate_paths_are_kept(self):
        changes = parse_response_document(build_response([("a.txt", "one"), ("a.txt", "two")]))
        self.assertEqual([e.content for e in changes.edits], ["one", "two"])

    def test_content_whitespace_is_preserved(self):
        changes = parse_response_document(build_response([("a.py", "\ndef f():\n    return 1\n")]))
        self.assertEqual(changes.edits[0].content, "\ndef f():\n    return 1\n")

    def test_escaped_and_cdata_content(self):
        xml_text = (
            "<response><pullRequest><title>T</title><body>B</body></pullRequest><files>"
            "<file><path>a.ts</path><content>if (a &lt; b &amp;&amp; c) {}</content></file>"
            "<file><path>b.html</path><content><![CDATA[<div>hi</div>]]></content></file>"
            "</files></response>"
        )
        changes = parse_response_document(xml_text)

        self.assertEqual(changes.edits[0].content, "if (a < b && c) {}")
        self.assertEqual(changes.edits[1].content, "<div>hi</div>")

    def test_empty_elements_parse_as_empty_text(self):
        changes = parse_response_document(build_response([("empty.txt", "")], body=""))
        self.assertEqual(changes.pull_request.body, "")
        self.assertEqual(changes.edits[0].content, "")

    def test_malformed_xml_fails(self):
        with self.assertRaises(ResponseParseError) as ctx:
            parse_response_document("<response><pullRequest></response>")
        self.assertEqual(ctx.exception.details["parse_stage"], "decode")

    def test_missing_pull_request_fails(self):
        with self.assertRaises(ResponseParseError):
            parse_response_document("<response><files></files></response>")

    def test_missing_title_fails(self):
        with self.assertRaises(ResponseParseError):
            parse_response_document(
                "<response><pullRequest><body>B</body></pullRequest><files></files></response>"
            )

    def test_missing_files_fails(self):
        with self.assertRaises(ResponseParseError):
            parse_response_document(
                "<response><pullRequest><title>T</title><body>B</body></pullRequest></response>"
            )

    def test_file_without_content_fails(self):
        with self.assertRaises(ResponseParseError):
            parse_response_document(
                "<response><pullRequest><title>T</title><body>B</body></pullRequest>"
                "<files><file><path>a.txt</path></file></files></response>"
            )

    def test_unescaped_markup_in_content_fails(self):
        with self.assertRaises(ResponseParseError):
            parse_response_document(build_response([("a.html", "<div>hi</div>")]))

    def test_wrong_root_element_fails(self):
        with self.assertRaises(ResponseParseError):
            parse_response_document("<reply><files></files></reply>")


class TestParseModelResponse(unittest.TestCase):

    def test_extracts_then_decodes(self):
        changes = parse_model_response(f"Here you go:\n{ADD_LOGGING_RESPONSE}\nDone.")
        self.assertEqual(changes.pull_request.title, "Add Logging")
        self.assertEqual(changes.modified_paths, ["src/log.ts"])

    def test_no_response_tag_fails_deterministically(self):
        for _ in range(3):
            with self.assertRaises(ResponseParseError):
                parse_model_response("<files><file><path>a</path><content>b</content></file></files>")


if __name__ == "__main__":
    unittest.main()
