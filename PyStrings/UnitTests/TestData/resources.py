from PyStrings.ResourceItem import BlankLine, Comment, StringEntry

source_xml = """<?xml version="1.0" encoding="utf-8"?>
<resources xmlns:tools="http://schemas.android.com/tools">
    <!-- Application name -->
    <entry name="app_name" translatable="false">MyApp</entry>

    <entry name="greeting">Hello</entry>
    <entry name="welcome">Welcome to <b>MyApp</b>, %1$s!</entry>
    <entry name="count"><xliff:g id="count" example="3">%d</xliff:g> items</entry>
    <entry name="terms">Fish &amp; Chips &lt;3</entry>
</resources>
"""

source_items = [
    Comment(" Application name "),
    StringEntry("app_name", "MyApp", translatable=False),
    BlankLine(),
    StringEntry("greeting", "Hello"),
    StringEntry("welcome", "Welcome to <b>MyApp</b>, %1$s!"),
    StringEntry("count", '<xliff:g id="count" example="3">%d</xliff:g> items'),
    StringEntry("terms", "Fish &amp; Chips &lt;3"),
]

source_root_attributes = { 'xmlns:tools': "http://schemas.android.com/tools" }

french_xml = """<?xml version="1.0" encoding="utf-8"?>
<resources>
    <!-- Traductions -->
    <entry name="app_name" translatable="false">MonApp</entry>
    <entry name="greeting">Bonjour</entry>

    <entry name="obsolete">Ancien texte</entry>
</resources>
"""

# Provider results in the expected form, deliberately out of source order
french_results = [
    { 'name': "welcome", 'value': "Bienvenue dans <b>MyApp</b>, %1$s !", 'isTranslatable': True },
    { 'name': "greeting", 'value': "Bonjour", 'isTranslatable': True },
    { 'name': "count", 'value': '<xliff:g id="count" example="3">%d</xliff:g> éléments', 'isTranslatable': True },
    { 'name': "terms", 'value': "Poisson &amp; frites &lt;3", 'isTranslatable': True },
]

german_results = [
    { 'name': "greeting", 'value': "Hallo", 'isTranslatable': True },
    { 'name': "welcome", 'value': "Willkommen bei <b>MyApp</b>, %1$s!", 'isTranslatable': True },
    { 'name': "count", 'value': '<xliff:g id="count" example="3">%d</xliff:g> Elemente', 'isTranslatable': True },
    { 'name': "terms", 'value': "Fisch &amp; Pommes &lt;3", 'isTranslatable': True },
]

expected_french_xml = """<?xml version="1.0" encoding="utf-8"?>
<resources>
    <!-- Traductions -->
    <entry name="app_name" translatable="false">MonApp</entry>
    <entry name="greeting">Bonjour</entry>

    <entry name="welcome">Bienvenue dans <b>MyApp</b>, %1$s !</entry>
    <entry name="count"><xliff:g id="count" example="3">%d</xliff:g> éléments</entry>
    <entry name="terms">Poisson &amp; frites &lt;3</entry>
</resources>
"""

expected_german_xml = """<?xml version="1.0" encoding="utf-8"?>
<resources>
    <entry name="greeting">Hallo</entry>
    <entry name="welcome">Willkommen bei <b>MyApp</b>, %1$s!</entry>
    <entry name="count"><xliff:g id="count" example="3">%d</xliff:g> Elemente</entry>
    <entry name="terms">Fisch &amp; Pommes &lt;3</entry>
</resources>
"""

nested_xml = """<resources>
    <entry name="deep">Start <a href="x" data-b="2"><b><i><u><s>core</s></u></i></b></a> end</entry>
    <entry name="cdata"><![CDATA[<b>bold</b> & more]]></entry>
    <entry name="commented">Before<!-- note -->after</entry>
    <entry name="selfclosing">Line<br/>break</entry>
</resources>"""

malformed_xml = """<?xml version="1.0" encoding="utf-8"?>
<resources>
    <entry name="greeting">Hello</entrx>
</resources>
"""

android_xml = """<?xml version="1.0" encoding="utf-8"?>
<resources>
    <string name="title">Title</string>
    <plurals name="songs">
        <item quantity="one">%d song</item>
        <item quantity="other">%d songs</item>
    </plurals>
    <string name="hidden" translatable="FALSE">Hidden</string>
    <string name="unsure" translatable="maybe">Unsure</string>
    <string>No name</string>
</resources>
"""
