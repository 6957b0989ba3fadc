from bank_reconciliation.ingest.csv_text import (
    detect_delimiter,
    read_csv_rows,
    split_rows,
    tokenize_line,
)


def test_detect_delimiter_prefers_semicolon_on_tie_or_majority():
    assert detect_delimiter("Tanggal;Keterangan;Saldo\n01/03;Setoran;1.000,00") == ";"
    assert detect_delimiter("a;b\nc,d") == ";"


def test_detect_delimiter_picks_comma_when_commas_dominate():
    text = "Date,Description,Debit,Credit,Balance\n03/01,Coffee,25.00,,975.00"
    assert detect_delimiter(text) == ","


def test_detect_delimiter_only_looks_at_first_five_lines():
    head = "\n".join(["a;b;c"] * 5)
    tail = "\n".join(["x,y,z,w,v"] * 50)
    assert detect_delimiter(head + "\n" + tail) == ";"


def test_tokenize_line_keeps_quoted_delimiters_and_drops_quotes():
    assert tokenize_line('01/03;"Transfer; BCA";500', ";") == ["01/03", "Transfer; BCA", "500"]


def test_tokenize_line_trims_fields_and_emits_trailing_empty_field():
    assert tokenize_line(" a ; b ;", ";") == ["a", "b", ""]


def test_tokenize_line_unterminated_quote_swallows_rest_of_line():
    assert tokenize_line('a;"b;c', ";") == ["a", "b;c"]


def test_split_rows_keeps_newlines_inside_quotes_and_drops_cr():
    text = 'Tanggal;Keterangan\r\n01/03;"Line one\nLine two"\r\n\r\n'
    rows = split_rows(text, ";")
    assert rows == [["Tanggal", "Keterangan"], ["01/03", "Line one\nLine two"]]


def test_split_rows_skips_blank_lines_and_handles_missing_final_newline():
    rows = split_rows("a,b\n   \nc,d", ",")
    assert rows == [["a", "b"], ["c", "d"]]


def test_read_csv_rows_detects_and_splits():
    rows = read_csv_rows("Date,Description,Amount\n01/02,Rent,1000\n")
    assert rows == [["Date", "Description", "Amount"], ["01/02", "Rent", "1000"]]
