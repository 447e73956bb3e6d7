from web2pdf.cli import app

app(prog_name="web2pdf")
