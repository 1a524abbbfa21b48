# src/e2e/test_identifiers.py

from completion.identifiers import extract_identifiers


def test_local_and_function_declarations_are_found():
    doc = "local x = 1\nfunction f(a, b)\n  return a + b\nend\n"
    names = extract_identifiers(doc)
    assert "x" in names
    assert "f" in names


def test_repeated_calls_are_identical():
    doc = "local count = 0\nfunction step() count = count + 1 end"
    assert extract_identifiers(doc) == extract_identifiers(doc)


def test_duplicates_collapse_and_keep_first_occurrence_order():
    doc = "local b\nlocal a\nlocal b\nfunction a() end\nfunction c() end"
    assert extract_identifiers(doc) == ("b", "a", "c")


def test_local_function_declares_the_function_name_only():
    names = extract_identifiers("local function helper() end")
    assert names == ("helper",)


def test_local_name_list_declares_every_name():
    names = extract_identifiers("local a, b,c = 1, 2, 3")
    assert names == ("a", "b", "c")


def test_no_scoping_nested_declarations_are_visible():
    doc = "if false then\n  do\n    local hidden = 1\n  end\nend"
    assert "hidden" in extract_identifiers(doc)


def test_words_that_only_contain_keywords_do_not_match():
    doc = "mylocal x\nlocalize y\nmyfunction z\nprint(functional)"
    assert extract_identifiers(doc) == ()


def test_names_never_start_with_a_digit():
    assert extract_identifiers("local 9lives = 1") == ()


def test_empty_document():
    assert extract_identifiers("") == ()
