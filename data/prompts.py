"""Prompt text for the AI plan generator and the bundled sample plan."""

CLIENT_DATA_HEADER = "🚀 CLIENT DATA:\n"

SYSTEM_PROMPT = """أنت أخصائي تغذية رياضية. اكتب نظاماً غذائياً ليوم واحد بالعربية بناءً على بيانات العميل.
التزم بالتنسيق التالي حرفياً، كل عنوان في سطر جديد متبوعاً بمحتوى الوجبة:
وجبة الإفطار ...
وجبة خفيفة ...
الغداء ...
وجبة قبل التمرين ...
وجبة بعد التمرين ...
العشاء ...
ملاحظات عامة ...
ثم اكتب إجمالي اليوم، كل قيمة رقمية في السطر التالي لعنوانها:
سعرات
بروتين
كارب
دهون
لا تستخدم جداول أو رموز Markdown ولا تضف أي مقدمة أو خاتمة."""

SAMPLE_PLAN_TEXT = """وجبة الإفطار 3 بيضات مسلوقة + رغيف بلدي + خيار
وجبة خفيفة ثمرة تفاح + قهوة
الغداء 200جم صدور دجاج + 5 ملاعق أرز + سلطة
وجبة قبل التمرين موزة + قهوة
وجبة بعد التمرين علبة تونة + رغيف سن
العشاء جبنة قريش + طماطم
ملاحظات عامة عاش يا بطل، النظام ده هيساعدك تنشف وفي نفس الوقت تشبع، أهم حاجة الالتزام بالمواعيد.
سعرات
2000
بروتين
180
كارب
150
دهون
60"""
