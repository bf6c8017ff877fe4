from pdf_decrypt.cli import main

main()
